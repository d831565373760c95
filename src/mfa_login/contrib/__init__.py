"""Framework integrations for mfa-login."""
