"""Infrastructure layer — the registries and filesystem the services read."""
