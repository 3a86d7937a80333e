"""Service layer: inspection operations returning ServiceResult."""
