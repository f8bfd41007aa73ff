"""Goldilocks field, its quadratic extension and extension algebra."""