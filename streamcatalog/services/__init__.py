"""Service layer coordinating the catalog models."""
