"""Report assembly, JSON contract and HTML export.

Use explicit imports:
    from worker.reports.contract import AnalysisReport, ReportVersion
    from worker.reports.assembler import ReportAssembler, assemble_report
    from worker.reports.exporter import ReportExporter, export_report
"""

__all__ = [
    # Contract
    "AnalysisReport",
    "ReportVersion",
    # Assembler
    "ReportAssembler",
    "assemble_report",
    # Exporter
    "ReportExporter",
    "ExportedDocument",
    "export_report",
]
