import io
import zipfile
from collections.abc import Callable

import openpyxl
import pytest
from docx import Document
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

ZipBuilder = Callable[[dict[str, bytes]], bytes]


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Word document with two paragraphs and a 2x2 table."""
    document = Document()
    document.add_paragraph("Share Purchase Agreement")
    document.add_paragraph("The seller gives a warranty on title.")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Party"
    table.cell(0, 1).text = "Role"
    table.cell(1, 0).text = "Acme Ltd"
    table.cell(1, 1).text = "Seller"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


def build_xlsx(sheets: dict[str, list[list[object]]]) -> bytes:
    workbook = openpyxl.Workbook()
    workbook.remove(workbook.active)
    for title, rows in sheets.items():
        worksheet = workbook.create_sheet(title)
        for row in rows:
            worksheet.append(row)
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


@pytest.fixture()
def sample_xlsx_bytes() -> bytes:
    """Workbook with two small sheets."""
    return build_xlsx(
        {
            "Revenue": [["Year", "Amount"], [2023, 1000], [2024, None]],
            "Costs": [["Item", "Amount"], ["Rent", 200]],
        }
    )


def build_zip(files: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, data in files.items():
            archive.writestr(name, data)
    return buf.getvalue()


@pytest.fixture()
def zip_builder() -> ZipBuilder:
    return build_zip


@pytest.fixture()
def xlsx_builder() -> Callable[[dict[str, list[list[object]]]], bytes]:
    return build_xlsx


def build_zip_with_corrupt_member(corrupt_name: str, files: dict[str, bytes]) -> bytes:
    """Deflated archive whose `corrupt_name` member has a damaged compressed stream.

    The central directory stays intact, so the archive opens and only reading
    that member fails.
    """
    raw = bytearray(build_zip(files))
    with zipfile.ZipFile(io.BytesIO(bytes(raw))) as archive:
        info = archive.getinfo(corrupt_name)
    name_length = int.from_bytes(raw[info.header_offset + 26 : info.header_offset + 28], "little")
    extra_length = int.from_bytes(raw[info.header_offset + 28 : info.header_offset + 30], "little")
    data_start = info.header_offset + 30 + name_length + extra_length
    # 0xFF opens a final block of reserved type 3, which zlib rejects
    raw[data_start : data_start + 4] = b"\xff\xff\xff\xff"
    return bytes(raw)


@pytest.fixture()
def corrupt_member_zip() -> bytes:
    return build_zip_with_corrupt_member(
        "broken.txt",
        {"broken.txt": b"quarterly revenue " * 200, "ok.txt": b"lease agreement"},
    )


@pytest.fixture()
def corrupt_zip_builder() -> Callable[[str, dict[str, bytes]], bytes]:
    return build_zip_with_corrupt_member
