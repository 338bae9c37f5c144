"""Application layer: request DTOs, service and command dispatch"""
