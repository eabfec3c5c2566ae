from alchemist.export.serializer import ExportSerializer, export_filename

__all__ = ["ExportSerializer", "export_filename"]
