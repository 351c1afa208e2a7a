from prisma_case_format.models import SchemaDocument


def emit(document: SchemaDocument) -> str:
    """Serialize a document back to schema text, reusing original text wherever nothing was renamed."""
    return "".join(segment.render() for segment in document.segments)
