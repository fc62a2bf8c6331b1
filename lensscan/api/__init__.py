"""HTTP API for the scan batch."""
