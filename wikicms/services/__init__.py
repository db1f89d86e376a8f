"""Services package - request-independent application logic."""
