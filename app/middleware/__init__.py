"""
Middleware applied to every request.

AuthenticationMiddleware resolves the caller's identity once per request and
stores it on request.state.identity for the authorization dependencies.
"""
