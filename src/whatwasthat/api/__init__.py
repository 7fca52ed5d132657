"""HTTP API for whatwasthat."""
