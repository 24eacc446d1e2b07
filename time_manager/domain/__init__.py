"""Domain layer for the time manager: policy models, decisions and errors."""
