from __future__ import annotations

from govuk_elements import Config, Translator, render_node
from govuk_elements.ui import text_content
from govuk_elements.ui.summary import error_summary, render_error_summary

from dummy_models import WELSH, Address, Case, Country, Penalty, Person, StateMachine

TITLE = "Message to alert the user to a problem goes here"
DESCRIPTION = "Optional description of the errors and how to correct them"


def test_summary_is_none_without_errors() -> None:
    assert error_summary(Person(), TITLE, DESCRIPTION) is None
    assert render_error_summary(Person(), TITLE, DESCRIPTION) is None
    assert render_error_summary(None, TITLE) is None


def test_summary_snapshot_for_root_error() -> None:
    person = Person()
    person.valid()
    html = render_error_summary(person, TITLE, DESCRIPTION)
    assert html == (
        '<div class="error-summary" role="alert" aria-labelledby="error-summary-heading" tabindex="-1">'
        f'<h1 id="error-summary-heading" class="heading-medium error-summary-heading">{TITLE}</h1>'
        f"<p>{DESCRIPTION}</p>"
        '<ul class="error-summary-list">'
        '<li><a href="#person_name">Full name is required</a></li>'
        "</ul>"
        "</div>"
    )


def test_summary_omits_description_when_absent() -> None:
    person = Person()
    person.valid()
    html = render_error_summary(person, TITLE)
    assert "<p>" not in html
    assert '<a href="#person_name">Full name is required</a>' in html


def test_summary_links_nested_errors() -> None:
    person = Person(address=Address(country=Country()))
    person.address.valid()
    person.address.country.valid()
    html = render_error_summary(person, TITLE, DESCRIPTION)
    assert '<a href="#person_address_attributes_postcode">Postcode is required</a>' in html
    assert (
        '<a href="#person_address_attributes_country_attributes_name">Country is required</a>' in html
    )


def test_summary_lists_one_item_per_message() -> None:
    person = Person()
    person.errors.add("password", "too_short", "Password is too short")
    person.errors.add("password", "invalid", "Password must contain a number")
    node = error_summary(person, TITLE)
    items = node.children[-1].children
    assert len(items) == 2
    assert all(item.children[0].props["href"] == "#person_password" for item in items)


def test_summary_uses_translation_for_message() -> None:
    person = Person(address=Address())
    person.valid()
    person.address.valid()
    html = render_error_summary(person, TITLE, DESCRIPTION, translator=Translator(WELSH, locale="cy"))
    assert '<a href="#person_name">Mae angen enw llawn</a>' in html
    assert '<a href="#person_address_attributes_postcode">Mae angen cod post</a>' in html


def test_summary_namespaced_resource_anchor() -> None:
    penalty = Penalty()
    penalty.valid()
    html = render_error_summary(penalty, TITLE)
    assert '<a href="#steps_appeal_penalty_amount">Amount is required</a>' in html


def test_summary_with_circular_reference() -> None:
    kase = Case()
    kase.state_machine = StateMachine(object=kase)
    kase.valid()
    html = render_error_summary(kase, TITLE)
    assert html.count("<li>") == 1
    assert '<a href="#case_name">Name is required</a>' in html


def test_summary_with_array_of_resources() -> None:
    kase = Case(subcases=[Case(), Case()])
    for c in (kase, *kase.subcases):
        c.valid()
    html = render_error_summary(kase, TITLE)
    assert '<a href="#case_name">Name is required</a>' in html
    assert html.count('<a href="#case_case_attributes_name">Name is required</a>') == 2


def test_summary_escapes_heading_and_messages() -> None:
    person = Person()
    person.errors.add("name", "invalid", "Name <b>bad</b> & wrong")
    html = render_error_summary(person, "Fix <these>")
    assert "Fix &lt;these&gt;" in html
    assert "Name &lt;b&gt;bad&lt;/b&gt; &amp; wrong" in html


def test_summary_respects_configured_classes() -> None:
    config = Config({"summary": {"class": "govuk-error-summary", "role": "group"}})
    person = Person()
    person.valid()
    html = render_node(error_summary(person, TITLE, config=config))
    assert html.startswith('<div class="govuk-error-summary" role="group"')


def test_summary_node_text_and_html_agree() -> None:
    person = Person()
    person.valid()
    node = error_summary(person, TITLE)
    assert text_content(node.children[0]) == TITLE
    assert text_content(node.children[-1]) == "Full name is required"
    assert node.to_html() == render_error_summary(person, TITLE)
