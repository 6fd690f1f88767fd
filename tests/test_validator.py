import unittest
from dataclasses import FrozenInstanceError

from bs4 import BeautifulSoup

from extraction.extractor import ProfileExtractor
from extraction.models import ProfileRecord, ValidationFailure
from extraction.validator import validate
from tests.page_fixtures import profile_page

def extract(html):
    return ProfileExtractor().extract(BeautifulSoup(html, "html.parser"))

class TestValidate(unittest.TestCase):
    def test_title_and_name_without_links_is_valid(self):
        result = validate(extract(profile_page()))
        self.assertIsInstance(result, ProfileRecord)
        self.assertEqual(dict(result.links), {})
        self.assertEqual(dict(result.icon_links), {})
        self.assertEqual(result.profile_image_url, "")

    def test_full_page_is_valid(self):
        html = profile_page(
            links=[("My Site", "https://example.com")],
            icons=[("Instagram", "https://instagram.com/jane")],
            image="https://cdn.example/img.jpg",
        )
        self.assertIsInstance(validate(extract(html)), ProfileRecord)

    def test_missing_profile_name_fails(self):
        result = validate(extract(profile_page(profile_name=None, links=[("A", "https://a.example")])))
        self.assertIsInstance(result, ValidationFailure)
        self.assertEqual(result.missing, ("profile_name",))

    def test_missing_title_fails(self):
        result = validate(extract(profile_page(title=None)))
        self.assertIsInstance(result, ValidationFailure)
        self.assertEqual(result.missing, ("title",))

    def test_trailing_empty_profile_title_fails(self):
        html = profile_page().replace("</body>", '<div id="profile-title"></div></body>')
        result = validate(extract(html))
        self.assertIsInstance(result, ValidationFailure)
        self.assertEqual(result.missing, ("profile_name",))

    def test_missing_both_reports_both(self):
        result = validate(ProfileRecord())
        self.assertEqual(result.missing, ("title", "profile_name"))
        self.assertIn("failed to extract required profile information", str(result))

    def test_validated_record_is_read_only(self):
        record = validate(ProfileRecord(title="T", profile_name="N", links={"a": "b"}))
        with self.assertRaises(FrozenInstanceError):
            record.title = "changed"
        with self.assertRaises(TypeError):
            record.links["c"] = "d"
        self.assertEqual(record, ProfileRecord(title="T", profile_name="N", links={"a": "b"}))

if __name__ == "__main__":
    unittest.main()
