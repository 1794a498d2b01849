"""
Secure Download

Issues short-lived tokens granting access to registered files and
resources, gated by a caller-supplied access key.
"""

__version__ = "1.0.0"
