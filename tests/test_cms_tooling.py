"""
Tests for the administrative CMS tooling.

- core/cms/richtext.py conversion
- core/cms/audit.py results files
- scripts/ entry points, dry run by default
"""

import json
import sys
from pathlib import Path

# Ensure project root and scripts/ on path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "scripts"))

import pytest

import check_images
import cms_set_fields
import migrate_rich_text
from core.cms import CMSError
from core.cms.audit import AbortException, ResultsWriter, finalize, new_run, record_operation
from core.cms.richtext import (
    convert_faq,
    convert_locale_field,
    convert_page,
    convert_section,
    extract_plain_text,
)


def block(*texts):
    return {
        "_type": "block",
        "children": [{"_type": "span", "text": text} for text in texts],
    }


# ---------------------------------------------------------------------------
# Rich text conversion
# ---------------------------------------------------------------------------

class TestExtractPlainText:

    def test_blocks_become_lines(self):
        assert extract_plain_text([block("Ciao ", "mondo"), block("Riga due")]) == "Ciao mondo\nRiga due"

    def test_non_blocks_are_skipped(self):
        assert extract_plain_text([{"_type": "image"}, block("Testo")]) == "Testo"

    def test_non_span_children_skipped(self):
        value = [{"_type": "block", "children": [{"_type": "span", "text": "A"}, {"_type": "link"}]}]
        assert extract_plain_text(value) == "A"

    def test_plain_values(self):
        assert extract_plain_text(None) == ""
        assert extract_plain_text([]) == ""
        assert extract_plain_text("gia testo") == "gia testo"


class TestConvertLocaleField:

    def test_converts_block_languages(self):
        value = {"it": [block("Titolo")], "en": "Title"}
        assert convert_locale_field(value) == {"it": "Titolo", "en": "Title"}

    def test_unchanged_is_none(self):
        assert convert_locale_field({"it": "Titolo", "en": "Title"}) is None
        assert convert_locale_field("Titolo") is None


class TestConvertDocuments:

    def test_section_fields_and_nested_arrays(self):
        section = {
            "_type": "contactSection",
            "title": {"it": [block("Contatti")]},
            "subtitle": {"it": "Scrivici"},
            "formFields": [
                {"label": {"it": [block("Nome")]}, "placeholder": {"it": "Mario"}},
                {"label": {"it": "Email"}},
            ],
            "openingHours": [{"days": {"en": [block("Mon-Fri")]}}],
        }
        updated, changed = convert_section(section)

        assert changed == ["title", "formFields[0].label", "openingHours[0].days"]
        assert updated["title"] == {"it": "Contatti"}
        assert updated["formFields"][0]["label"] == {"it": "Nome"}
        assert updated["formFields"][1] is section["formFields"][1]
        assert updated["openingHours"][0]["days"] == {"en": "Mon-Fri"}
        # input untouched
        assert section["title"] == {"it": [block("Contatti")]}

    def test_unchanged_section_is_returned_as_is(self):
        section = {"title": {"it": "Ok"}}
        updated, changed = convert_section(section)
        assert updated is section
        assert changed == []

    def test_page(self):
        page = {"_id": "p", "sections": [{"title": {"it": "Ok"}}, {"eyebrow": {"es": [block("Hola")]}}]}
        sections, changed = convert_page(page)
        assert changed == ["sections[1].eyebrow"]
        assert sections[1]["eyebrow"] == {"es": "Hola"}

    def test_page_without_changes(self):
        assert convert_page({"sections": [{"title": {"it": "Ok"}}]}) == (None, [])
        assert convert_page({}) == (None, [])

    def test_faq(self):
        faq = {"question": {"it": "Domanda?"}, "answer": {"it": [block("Risposta")]}}
        assert convert_faq(faq) == {"answer": {"it": "Risposta"}}
        assert convert_faq({"question": {"it": "Ok"}}) == {}


# ---------------------------------------------------------------------------
# Audit trail
# ---------------------------------------------------------------------------

class TestAudit:

    def test_results_files(self, tmp_path):
        results = new_run("unit", dry_run=True)
        record_operation(results, "doc1", "DRY_RUN_OK", before={"title": "A"}, after={"title": "B"})
        record_operation(results, "doc2", "FAILED", error="boom")
        finalize(results)

        json_path, md_path = ResultsWriter(tmp_path).write_results(results)

        data = json.loads(json_path.read_text())
        assert data["execution_mode"] == "DRY_RUN"
        assert data["summary"] == {"total_operations": 2, "by_status": {"DRY_RUN_OK": 1, "FAILED": 1}}
        assert data["operation_results"][0]["before"] == {"title": "A"}
        assert data["operation_results"][0]["dry_run"] is True

        markdown = md_path.read_text()
        assert "# CMS Run: unit-" in markdown
        assert "**Error:** boom" in markdown

    def test_apply_mode(self):
        assert new_run("unit", dry_run=False)["execution_mode"] == "APPLY"


# ---------------------------------------------------------------------------
# Scripts
# ---------------------------------------------------------------------------

class FakeCMS:

    def __init__(self, documents=None, fail_patch=False):
        self.documents = documents or {}
        self.fail_patch = fail_patch
        self.patches = []

    def query(self, groq, params=None, preview=False):
        if params and "id" in params:
            return self.documents.get(params["id"])
        return self.documents.get(groq)

    def patch_set(self, doc_id, fields, dry_run=False):
        if self.fail_patch:
            raise CMSError("Mutation failed 403: forbidden", status_code=403)
        self.patches.append((doc_id, fields, dry_run))
        return {"results": [{"id": doc_id}]}


@pytest.fixture
def reports(tmp_path, monkeypatch):
    writer = ResultsWriter(tmp_path)
    for module in (cms_set_fields, migrate_rich_text):
        monkeypatch.setattr(module, "ResultsWriter", lambda: writer)
    return tmp_path


class TestSetFields:

    def test_parse_assignment(self):
        assert cms_set_fields.parse_assignment("phone=+39 0123") == ("phone", "+39 0123")
        assert cms_set_fields.parse_assignment("postalCode=20100") == ("postalCode", "20100")
        assert cms_set_fields.parse_assignment("active=true") == ("active", "true")
        assert cms_set_fields.parse_assignment("seo.metaTitle=a=b") == ("seo.metaTitle", "a=b")

    def test_parse_assignment_as_json(self):
        assert cms_set_fields.parse_assignment('title={"it":"Ciao"}', as_json=True) == ("title", {"it": "Ciao"})
        assert cms_set_fields.parse_assignment("count=3", as_json=True) == ("count", 3)
        assert cms_set_fields.parse_assignment('postalCode="20100"', as_json=True) == ("postalCode", "20100")

    def test_invalid_json_value(self):
        with pytest.raises(AbortException):
            cms_set_fields.parse_assignment("title={it:Ciao}", as_json=True)

    @pytest.mark.parametrize("raw", ["novalue", "=x"])
    def test_invalid_assignment(self, raw):
        with pytest.raises(AbortException):
            cms_set_fields.parse_assignment(raw)

    def test_dry_run_records_before_values(self):
        cms = FakeCMS({"doc1": {"_id": "doc1", "title": "Vecchio", "seo": {"metaTitle": "M"}}})
        results = new_run("cms_set_fields", dry_run=True)

        entry = cms_set_fields.set_fields(cms, "doc1", {"title": "Nuovo", "seo.metaTitle": "N"}, False, results)

        assert entry["status"] == "DRY_RUN_OK"
        assert entry["before"] == {"title": "Vecchio", "seo.metaTitle": "M"}
        assert cms.patches == [("doc1", {"title": "Nuovo", "seo.metaTitle": "N"}, True)]

    def test_missing_document_aborts(self):
        with pytest.raises(AbortException):
            cms_set_fields.set_fields(FakeCMS(), "nope", {"a": 1}, False, new_run("t", True))

    def test_failed_patch_is_recorded(self):
        cms = FakeCMS({"doc1": {"_id": "doc1"}}, fail_patch=True)
        entry = cms_set_fields.set_fields(cms, "doc1", {"a": 1}, True, new_run("t", False))
        assert entry["status"] == "FAILED"
        assert "403" in entry["error"]

    def test_main_dry_run(self, reports, monkeypatch):
        cms = FakeCMS({"doc1": {"_id": "doc1", "title": "A"}})
        monkeypatch.setattr(cms_set_fields, "client_from_env", lambda require_token: cms)

        assert cms_set_fields.main(["--doc", "doc1", "--set", "title=B"]) == 0
        assert cms.patches == [("doc1", {"title": "B"}, True)]
        assert len(list(reports.glob("*.results.json"))) == 1

    def test_main_json_values(self, reports, monkeypatch):
        cms = FakeCMS({"doc1": {"_id": "doc1"}})
        monkeypatch.setattr(cms_set_fields, "client_from_env", lambda require_token: cms)

        argv = ["--doc", "doc1", "--json", "--set", 'title={"it":"Ciao"}', "--set", "order=2"]
        assert cms_set_fields.main(argv) == 0
        assert cms.patches == [("doc1", {"title": {"it": "Ciao"}, "order": 2}, True)]

    def test_main_invalid_json_aborts(self, reports, monkeypatch):
        cms = FakeCMS({"doc1": {"_id": "doc1"}})
        monkeypatch.setattr(cms_set_fields, "client_from_env", lambda require_token: cms)

        assert cms_set_fields.main(["--doc", "doc1", "--json", "--set", "title=Ciao"]) == 1
        assert cms.patches == []

    def test_main_execute(self, reports, monkeypatch):
        cms = FakeCMS({"doc1": {"_id": "doc1"}})
        monkeypatch.setattr(cms_set_fields, "client_from_env", lambda require_token: cms)

        assert cms_set_fields.main(["--doc", "doc1", "--set", "title=B", "--execute"]) == 0
        assert cms.patches[0][2] is False

    def test_main_without_assignments_aborts(self, reports, monkeypatch):
        monkeypatch.setattr(cms_set_fields, "client_from_env", lambda require_token: FakeCMS())
        assert cms_set_fields.main(["--doc", "doc1"]) == 1
        data = json.loads(next(reports.glob("*.results.json")).read_text())
        assert data["aborted"] is True


class TestMigrateRichText:

    def test_dry_run(self, reports, monkeypatch):
        cms = FakeCMS({
            migrate_rich_text.PAGES_QUERY: [
                {"_id": "page1", "sections": [{"title": {"it": [block("Titolo")]}}]},
                {"_id": "page2", "sections": [{"title": {"it": "Ok"}}]},
            ],
            migrate_rich_text.FAQS_QUERY: [
                {"_id": "faq1", "question": {"it": [block("Perche?")]}},
            ],
        })
        monkeypatch.setattr(migrate_rich_text, "client_from_env", lambda require_token: cms)

        assert migrate_rich_text.main([]) == 0
        assert [(doc_id, dry_run) for doc_id, _, dry_run in cms.patches] == [("page1", True), ("faq1", True)]
        assert cms.patches[0][1] == {"sections": [{"title": {"it": "Titolo"}}]}
        assert cms.patches[1][1] == {"question": {"it": "Perche?"}}

        results = json.loads(next(reports.glob("*.results.json")).read_text())
        entries = {e["doc_id"]: e for e in results["operation_results"]}
        assert entries["page1"]["before"] == {"sections": [{"title": {"it": [block("Titolo")]}}]}
        assert entries["page1"]["after"] == {"sections[0].title": True}
        assert entries["faq1"]["before"] == {"question": {"it": [block("Perche?")]}}

    def test_missing_token_aborts(self, reports, monkeypatch):
        def no_token(require_token):
            raise CMSError("SANITY_API_TOKEN environment variable is required")

        monkeypatch.setattr(migrate_rich_text, "client_from_env", no_token)
        assert migrate_rich_text.main(["--execute"]) == 1


class TestCheckImages:

    def test_summarize(self):
        rows = check_images.summarize([
            {"_id": "p1", "name": {"it": "Policut"}, "mainImageRef": "image-abc", "galleryCount": 3},
            {"_id": "p2", "name": None, "mainImageRef": None, "galleryCount": None},
        ])
        assert rows[0] == {"id": "p1", "name": "Policut", "main_image": "image-abc", "gallery": 3}
        assert rows[1]["name"] == "(senza nome)"
        assert rows[1]["gallery"] == 0

    def test_main(self, monkeypatch, capsys):
        cms = FakeCMS({check_images.PRODUCT_IMAGES_QUERY: [{"_id": "p2", "name": {"it": "X"}}]})
        monkeypatch.setattr(check_images, "client_from_env", lambda: cms)
        assert check_images.main(["--missing-only"]) == 0
        assert "Missing main image: 1" in capsys.readouterr().out
