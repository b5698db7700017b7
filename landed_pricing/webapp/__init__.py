"""
HTTP API for landed pricing.
"""
