from reservebucket.pdf.pdfio import extract_text_by_page, read_schedule

__all__ = ["extract_text_by_page", "read_schedule"]
