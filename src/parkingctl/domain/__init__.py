"""Domain layer: entities, aggregate root and errors"""
