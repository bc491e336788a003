"""
oauthapp

Pluggable OAuth 2.0 provider abstraction: a registry of named identity
provider definitions that build authorization URLs and exchange, refresh and
issue tokens against provider-specific endpoints.
"""

__version__ = "0.1.0"
