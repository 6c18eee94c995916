import asyncio
import unittest
from unittest import mock

from fastapi import HTTPException
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from errors import StoreError

SAMPLE_TEXT = (
    "Jane Doe\n"
    "jane@x.com\n"
    "555-123-4567\n"
    "Skills: Go, Rust, C++, Python, SQL\n"
    "Summary: Over ten years of backend engineering leadership across distributed systems teams."
)


def make_settings(**overrides) -> Settings:
    data = dict(
        base_dir="unused",
        database_url="sqlite://",
        log_level="WARNING",
        analysis_delay_seconds=0.0,
        max_upload_mb=1.0,
        cors_allowed_origins=("*",),
    )
    data.update(overrides)
    return Settings(**data)



def resume_payload(**overrides) -> dict:
    data = {
        "name": "Jane Doe",
        "email": "jane@x.com",
        "phone": "555-123-4567",
        "skills": ["Go", "Rust", " "],
        "experience": [
            {"company": "Acme", "position": "Engineer", "description": "Increased revenue by 20%"},
            {"company": "Globex", "position": "Lead"},
        ],
        "education": [{"institution": "MIT", "degree": "BSc"}],
        "certifications": [],
    }
    data.update(overrides)
    return data


class ResumeApiTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(create_app(make_settings()))
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def test_upload_extracts_fields(self):
        r = self.client.post(
            "/resumes/upload",
            files={"resume": ("cv.txt", SAMPLE_TEXT.encode("utf-8"), "text/plain")},
        )
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertIsNone(body["id"])
        self.assertEqual(body["name"], "Jane Doe")
        self.assertEqual(body["skills"], ["Go", "Rust", "C++", "Python", "SQL"])
        self.assertEqual(body["experience"], [])

    def test_upload_rejects_unknown_format(self):
        r = self.client.post("/resumes/upload", files={"resume": ("cv.odt", b"data", "application/octet-stream")})
        self.assertEqual(r.status_code, 400)

    def test_upload_too_large(self):
        big = b"a" * (1024 * 1024 + 1)
        r = self.client.post("/resumes/upload", files={"resume": ("cv.txt", big, "text/plain")})
        self.assertEqual(r.status_code, 413)

    def test_upload_size_checked_before_reading(self):
        route = next(r for r in self.client.app.routes if getattr(r, "path", None) == "/resumes/upload")
        upload = mock.Mock(size=2 * 1024 * 1024, filename="cv.txt")
        upload.read = mock.AsyncMock(side_effect=AssertionError("read the oversized upload"))

        with self.assertRaises(HTTPException) as ctx:
            asyncio.run(route.endpoint(upload))
        self.assertEqual(ctx.exception.status_code, 413)
        upload.read.assert_not_called()

    def test_crud_cycle(self):
        r = self.client.post("/resumes", json=resume_payload())
        self.assertEqual(r.status_code, 201)
        created = r.json()
        resume_id = created["id"]
        self.assertTrue(resume_id)
        self.assertEqual(created["skills"], ["Go", "Rust"])

        r = self.client.get(f"/resumes/{resume_id}")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), created)

        r = self.client.put(f"/resumes/{resume_id}", json=resume_payload(name="Jane Q. Doe", experience=[]))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["id"], resume_id)
        self.assertEqual(r.json()["experience"], [])

        listed = self.client.get("/resumes").json()
        self.assertEqual([x["name"] for x in listed], ["Jane Q. Doe"])

        self.assertEqual(self.client.delete(f"/resumes/{resume_id}").status_code, 204)
        self.assertEqual(self.client.get(f"/resumes/{resume_id}").status_code, 404)
        self.assertEqual(self.client.delete(f"/resumes/{resume_id}").status_code, 404)

    def test_update_missing(self):
        r = self.client.put("/resumes/missing", json=resume_payload())
        self.assertEqual(r.status_code, 404)

    def test_validation_errors(self):
        self.assertEqual(self.client.post("/resumes", json=resume_payload(name=" ")).status_code, 422)
        bad_exp = resume_payload(experience=[{"company": "Acme"}])
        self.assertEqual(self.client.post("/resumes", json=bad_exp).status_code, 422)
        self.assertEqual(self.client.get("/resumes").json(), [])

    def test_analyze(self):
        r = self.client.post("/analyze", json=resume_payload())
        self.assertEqual(r.status_code, 200)
        body = r.json()
        # contact 10 + experience 20 + achievements 10 + education 10
        self.assertEqual(body["score"], 50)
        self.assertEqual(body["rating"], "Fair")
        self.assertIn("Experience includes quantifiable achievements", body["strengths"])
        self.assertIn("List at least 5 relevant skills", body["improvements"])

    def test_analyze_saved(self):
        resume_id = self.client.post("/resumes", json=resume_payload()).json()["id"]
        r = self.client.get(f"/resumes/{resume_id}/analysis")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["resume_id"], resume_id)
        self.assertEqual(r.json()["score"], 50)
        self.assertEqual(self.client.get("/resumes/missing/analysis").status_code, 404)


class StartupTests(unittest.TestCase):
    def test_bad_database_url_fails_startup(self):
        app = create_app(make_settings(database_url="nosuchdb://x/y"))
        with self.assertRaises(StoreError):
            with TestClient(app):
                pass


if __name__ == "__main__":
    unittest.main()
