"""Infrastructure adapters: imaging, remote processing, PDF output, storage."""
