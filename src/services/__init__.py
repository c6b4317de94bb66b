"""Business logic services used by handlers.

Handlers import services lazily so a cold start only pays for SQLAlchemy and
boto3 when a route actually needs a repository.
"""

# Do NOT import services here - use lazy loading in handlers instead
