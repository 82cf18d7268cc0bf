"""Domain layer: the User entity, its field rules and the repository contract."""
