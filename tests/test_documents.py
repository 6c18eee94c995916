import io
import unittest

import docx
import fitz

from errors import DecodeError
from parsers.documents import decode_document
from parsers.pdf import pdf_to_text


def make_pdf(text: str) -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def make_docx(paragraphs, table_rows=()) -> bytes:
    document = docx.Document()
    for p in paragraphs:
        document.add_paragraph(p)
    if table_rows:
        table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


class PdfTests(unittest.TestCase):
    def test_pdf_text(self):
        text = pdf_to_text(make_pdf("Jane Doe\njane@x.com"))
        self.assertIn("Jane Doe", text)
        self.assertIn("jane@x.com", text)

    def test_garbage_pdf(self):
        with self.assertRaises(DecodeError):
            pdf_to_text(b"definitely not a pdf")

    def test_blank_pdf(self):
        doc = fitz.open()
        doc.new_page()
        data = doc.tobytes()
        doc.close()
        with self.assertRaises(DecodeError):
            pdf_to_text(data)


class DecodeDocumentTests(unittest.TestCase):
    def test_txt(self):
        self.assertEqual(decode_document("Jane\nSkills: Go".encode("utf-8"), "cv.TXT"), "Jane\nSkills: Go")

    def test_txt_latin1(self):
        self.assertEqual(decode_document("Zoë".encode("latin-1"), "cv.txt"), "Zoë")

    def test_docx_paragraphs_and_tables(self):
        data = make_docx(["Jane Doe", "Skills: Go, Rust"], table_rows=[("Acme", "Engineer")])
        text = decode_document(data, "cv.docx")
        self.assertEqual(text.splitlines()[:2], ["Jane Doe", "Skills: Go, Rust"])
        self.assertIn("Acme Engineer", text)

    def test_pdf_dispatch(self):
        self.assertIn("Jane Doe", decode_document(make_pdf("Jane Doe"), "resume.pdf"))

    def test_unsupported_extension(self):
        with self.assertRaises(DecodeError):
            decode_document(b"whatever", "cv.odt")
        with self.assertRaises(DecodeError):
            decode_document(b"whatever", "")

    def test_empty_payload(self):
        with self.assertRaises(DecodeError):
            decode_document(b"", "cv.pdf")

    def test_whitespace_only_text(self):
        with self.assertRaises(DecodeError):
            decode_document(b"   \n  ", "cv.txt")

    def test_broken_docx(self):
        with self.assertRaises(DecodeError):
            decode_document(b"PK not really a zip", "cv.docx")


if __name__ == "__main__":
    unittest.main()
