from __future__ import annotations

import pytest

from competency_reformat.services.identifiers import (
    strip_boilerplate,
    synthesize_code,
    synthesize_program_prefix,
)


@pytest.mark.parametrize("name", ["K1", "S12", "c3", "CO4", "abc123"])
def test_synthesize_code_precoded_passthrough(name: str):
    assert synthesize_code(name) == name


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Physical Education", "PE"),
        ("Theoretical Understanding", "TU"),
        ("Autonomy & Responsibility", "AR"),
        ("Generic Problem Solving", "GPS"),
        ("unrelated topic", "UT"),
        ("Data-driven (applied) work", "DAW"),
        ("K-1 outcome", "KO"),
    ],
)
def test_synthesize_code_acronym(name: str, expected: str):
    assert synthesize_code(name) == expected


@pytest.mark.parametrize(
    "name",
    ["Unrelated Topic", "Lifelong learning and growth", "a b c d", "Ethics & Law & Order"],
)
def test_synthesize_code_multiword_length_and_case(name: str):
    code = synthesize_code(name)
    assert len(code) <= len(name.split())
    assert code == code.upper()


def test_synthesize_code_no_alphanumerics_returns_name():
    assert synthesize_code("& / -") == "& / -"


def test_synthesize_code_trims_and_handles_empty():
    assert synthesize_code("  K7  ") == "K7"
    assert synthesize_code("") == ""


def test_synthesize_code_deterministic():
    assert synthesize_code("Critical Thinking") == synthesize_code("Critical Thinking")


def test_program_prefix_two_words():
    assert synthesize_program_prefix("Physical Education") == "PE"
    assert synthesize_program_prefix("physical education") == "PE"


def test_program_prefix_embedded_abbreviation():
    assert synthesize_program_prefix("Computer Science and Engineering") == "CSE"
    assert synthesize_program_prefix("برنامج علوم الحاسب CS") == "CS"


def test_program_prefix_single_word():
    assert synthesize_program_prefix("Mathematics") == "MAT"
    assert synthesize_program_prefix("Art") == "ART"
    assert synthesize_program_prefix("IT") == "IT"


def test_program_prefix_truncates_at_separator():
    assert synthesize_program_prefix("Nursing - Bachelor Track") == "NUR"
    assert synthesize_program_prefix("Civil Engineering - Program Learning Outcomes") == "CE"


def test_program_prefix_strips_english_boilerplate():
    assert synthesize_program_prefix("Department of Chemistry") == "CHE"
    assert synthesize_program_prefix("Program Learning Outcomes Biology") == "BIO"


def test_program_prefix_strips_arabic_boilerplate():
    # "outcomes of program" + "physical education": initials of the two remaining words
    name = "مخرجات برنامج التربية البدنية"
    assert synthesize_program_prefix(name) == "اا"
    # "department" + single word
    assert synthesize_program_prefix("قسم الرياضيات") == "الر"


def test_program_prefix_curated_table_wins():
    known = {"مخرجات برنامج التربية البدنية": "PE", "Mathematics": "MATH"}
    assert synthesize_program_prefix("مخرجات برنامج التربية البدنية", known) == "PE"
    assert synthesize_program_prefix("Mathematics", known) == "MATH"
    # not in table -> procedural derivation
    assert synthesize_program_prefix("Physical Education", known) == "PE"


def test_program_prefix_only_boilerplate_falls_back_to_code():
    assert synthesize_program_prefix("Department") == "D"


def test_strip_boilerplate_whole_phrases_only():
    assert strip_boilerplate("Departmental Studies") == "Departmental Studies"
    assert strip_boilerplate("Department of  Physics") == "Physics"
    assert strip_boilerplate("Outcomes of Program Music", ["Outcomes of Program"]) == "Music"
