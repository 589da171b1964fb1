"""Domain layer: notification value objects, exceptions, ports."""
