"""Service layer: moderation, board flows and external collaborators."""
