"""Middleware module for the Data Interface API."""

from data_interface.middleware.auth_gate import AuthGateMiddleware, authenticate_request

__all__ = [
    "AuthGateMiddleware",
    "authenticate_request",
]
