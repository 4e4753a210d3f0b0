from .document_builder import OpenApiDocumentBuilder
from .document_writer import DocumentWriter

__all__ = ["OpenApiDocumentBuilder", "DocumentWriter"]
