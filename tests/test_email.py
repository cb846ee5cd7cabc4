from apps.common.email import format_plaintext_email


def test_format_plaintext_email():
    text = "The {{ cfp_type }} call for {{ conference }} closes on {{ end_date }}"
    assert (
        format_plaintext_email(text, cfp_type="events", conference="EMF", end_date="2026-06-01")
        == "The events call for EMF closes on 2026-06-01"
    )


def test_plain_text_is_unchanged():
    text = "Dates have moved, see the website. {braces} are fine too."
    assert format_plaintext_email(text, conference="EMF") == text


def test_unknown_placeholders_render_empty():
    assert format_plaintext_email("Hello {{ name }}!", conference="EMF") == "Hello !"


def test_invalid_template_is_sent_as_written():
    for text in ["Hello {{", "Hello {% if %}", "{{ conference | nosuchfilter }}"]:
        assert format_plaintext_email(text, conference="EMF") == text


def test_internals_are_not_exposed():
    assert "class" not in format_plaintext_email("{{ conference.__class__ }}", conference="EMF")
    assert format_plaintext_email("{{ conference.upper() }}", conference="EMF") == "EMF"
    assert format_plaintext_email("{{ cfp_types.append('x') }}", cfp_types=[]) == "{{ cfp_types.append('x') }}"
