"""Application Services Layer

Orchestrates domain services for file delivery.
"""

from .delivery_service import DeliveryService, EncodedBlob, FileDelivery

__all__ = [
    "DeliveryService",
    "FileDelivery",
    "EncodedBlob",
]
