"""User accounts: registration, login and listing."""
