"""QR attendance package.

Organized by feature modules (tokens, devices, attendance, issuer) with a thin
Flask controller layer over services and repositories.
"""
