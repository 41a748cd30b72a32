from vdr_lite.config.settings import Settings
from vdr_lite.extraction.base import BaseTextExtractor
from vdr_lite.extraction.csv_extractor import CsvExtractor
from vdr_lite.extraction.docx_extractor import DocxExtractor
from vdr_lite.extraction.pdfplumber_adapter import PdfPlumberAdapter
from vdr_lite.extraction.pymupdf_adapter import PyMuPdfAdapter
from vdr_lite.extraction.registry import ExtractorRegistry
from vdr_lite.extraction.txt_extractor import TxtExtractor
from vdr_lite.extraction.xlsx_extractor import XlsxExtractor


class ExtractorFactory:
    """Creates the extractor registry based on settings."""

    PDF_ADAPTERS: dict[str, type[BaseTextExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> ExtractorRegistry:
        max_length = settings.max_text_length
        return ExtractorRegistry(
            [
                cls.create_pdf_extractor(settings),
                DocxExtractor(max_length),
                XlsxExtractor(max_length),
                CsvExtractor(max_length),
                TxtExtractor(max_length),
            ]
        )

    @classmethod
    def create_pdf_extractor(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls(settings.max_text_length)
