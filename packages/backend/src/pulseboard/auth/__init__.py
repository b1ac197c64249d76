"""Session gate — signed cookie tokens and password hashing.

Learn: Users register or log in with email/password and receive a signed
JWT in an HTTP-only cookie. Every request verifies the cookie and resolves
to an identity or to anonymity. Nothing is stored server-side.
"""
