"""HTTP API: public v1 routes and gated admin routes."""
