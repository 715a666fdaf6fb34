"""License Lens — audit installed dependency licenses against a policy."""
