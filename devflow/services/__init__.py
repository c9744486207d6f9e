"""Business logic: authentication, authorization and project operations."""
