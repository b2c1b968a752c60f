"""End-to-end tests for extract_cv on plain resume text."""

import pytest
from pydantic import ValidationError

from cv_analyzer.core.cv_parser import CvParser, extract_cv
from cv_analyzer.core.rules import ExtractionRules
from cv_analyzer.core.schemas import CanonicalSection
from cv_analyzer.core.text_normalization import digit_count


def test_caps_name_and_education_entries():
    data = extract_cv("JOHN SMITH\nSoftware Engineer\nEDUCATION\nMIT\n2020-2024 Computer Science\n")
    assert data.name == "JOHN SMITH"
    assert data.education == "MIT\n2020-2024 Computer Science"
    assert data.experience is None
    assert data.email is None
    assert data.phone is None


def test_contact_fields():
    data = extract_cv("Jane Doe\nemail: jane@example.com\n+1 (555) 123-4567\n")
    assert data.name == "Jane Doe"
    assert data.email == "jane@example.com"
    assert digit_count(data.phone) >= 10


def test_unstructured_text():
    text = "just a plain note\nwithout any structure at all\n"
    data = extract_cv(text)
    assert data.skills == ()
    assert data.experience is None
    assert data.education is None
    assert data.raw_text == text


def test_cpp_skill():
    assert "C++" in extract_cv("SKILLS\nC++, Rust\n").skills


def test_experience_continuation_merges():
    data = extract_cv("EXPERIENCE\nJan 2020 - Present Acme Corp\nbuilt internal tools\n")
    assert data.experience == "Jan 2020 - Present Acme Corp\nbuilt internal tools"


def test_raw_text_is_verbatim():
    text = "JOHN SMITH\r\n\r\nEDUCATION\r\nMIT\n\n"
    data = extract_cv(text)
    assert data.raw_text == text
    assert data.education == "MIT"


def test_empty_text():
    data = extract_cv("")
    assert data.name is None
    assert data.skills == ()
    assert data.raw_text == ""


def test_same_input_same_output():
    text = "JOHN SMITH\njohn@example.com\nSKILLS\nPython, Docker\nEXPERIENCE\n2021 Acme\nshipped things\n"
    assert extract_cv(text) == extract_cv(text)


def test_turkish_resume():
    text = (
        "AYŞE YILMAZ\n"
        "ayse.yilmaz@example.com\n"
        "+90 532 123 45 67\n"
        "İŞ DENEYİMİ\n"
        "Ocak 2021 - Halen Trendyol\n"
        "React ve Node.js ile geliştirme\n"
        "EĞİTİM\n"
        "Boğaziçi Üniversitesi\n"
        "2016 - 2020 Bilgisayar Mühendisliği\n"
    )
    data = extract_cv(text)
    assert data.name == "AYŞE YILMAZ"
    assert data.email == "ayse.yilmaz@example.com"
    assert "532" in data.phone
    assert data.skills == ("React", "Node.js")
    assert data.experience == "Ocak 2021 - Halen Trendyol\nReact ve Node.js ile geliştirme"
    assert data.education == "Boğaziçi Üniversitesi\n2016 - 2020 Bilgisayar Mühendisliği"


def test_serialized_with_camel_case_raw_text():
    dumped = extract_cv("JOHN SMITH\n").model_dump(by_alias=True)
    assert set(dumped) == {"name", "email", "phone", "skills", "experience", "education", "rawText"}


def test_custom_rules():
    rules = ExtractionRules(
        section_aliases={CanonicalSection.EDUCATION: ["AUSBILDUNG"]},
        skill_vocabulary=["Kotlin"],
    )
    data = extract_cv("MAX MUSTERMANN\nAUSBILDUNG\n2015 Abitur\nKotlin, Python\n", rules=rules)
    assert data.name == "MAX MUSTERMANN"
    assert data.education == "2015 Abitur\nKotlin, Python"
    assert data.skills == ("Kotlin",)


def test_parser_reusable_across_documents():
    parser = CvParser()
    first = parser.parse("EDUCATION\nMIT\n")
    second = parser.parse("EXPERIENCE\n2020 Acme\n")
    assert first.education == "MIT"
    assert first.experience is None
    assert second.education is None
    assert second.experience == "2020 Acme"


def test_result_is_immutable():
    data = extract_cv("SKILLS\nPython, Docker\n")
    assert data.skills == ("Python", "Docker")
    with pytest.raises(AttributeError):
        data.skills.append("Go")
    with pytest.raises(ValidationError):
        data.name = "Someone"


def test_dotted_date_ranges_do_not_become_phone():
    data = extract_cv("EĞİTİM\nBoğaziçi Üniversitesi\n09.2016 - 06.2020 Bilgisayar\n")
    assert data.phone is None
    assert data.education == "Boğaziçi Üniversitesi\n09.2016 - 06.2020 Bilgisayar"
