"""Resource metadata registry."""

from .resource import OperationMetadata, ResourceMetadata, ResourceMetadataFactory

__all__ = ["OperationMetadata", "ResourceMetadata", "ResourceMetadataFactory"]
