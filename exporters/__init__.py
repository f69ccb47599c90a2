from .headers import rows_for_header, unique_fields
from .csv_exporter import CsvExporter
from .tab_exporter import TabExporter

__all__ = ["rows_for_header", "unique_fields", "CsvExporter", "TabExporter"]
