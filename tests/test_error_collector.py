from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from govuk_elements import AnchorPathError, ErrorCollector, ErrorEntry, Model, Translator, errors_exist
from govuk_elements.model import error_messages

from dummy_models import WELSH, Address, Case, Country, Penalty, Person, StateMachine


def test_collect_returns_empty_for_none_and_valid_graphs() -> None:
    collector = ErrorCollector()
    assert collector.collect(None) == []
    person = Person(name="Jane", address=Address(postcode="SW1A 1AA", country=Country(name="UK")))
    assert collector.collect(person) == []
    assert errors_exist(person) is False


def test_collect_root_attribute_error() -> None:
    person = Person()
    person.valid()
    assert ErrorCollector().collect(person) == [ErrorEntry("person_name", "Full name is required")]


def test_collect_child_error_only() -> None:
    person = Person(name="Jane", address=Address())
    person.address.valid()
    assert ErrorCollector().collect(person) == [
        ErrorEntry("person_address_attributes_postcode", "Postcode is required")
    ]


def test_collect_twice_nested_child_error() -> None:
    person = Person(address=Address(postcode="AB1", country=Country()))
    person.address.country.valid()
    entries = ErrorCollector().collect(person)
    assert entries == [
        ErrorEntry("person_address_attributes_country_attributes_name", "Country is required")
    ]


def test_collect_orders_parent_before_children() -> None:
    person = Person(address=Address(country=Country()))
    person.valid()
    person.address.valid()
    person.address.country.valid()
    anchors = [entry.anchor_id for entry in ErrorCollector().collect(person)]
    assert anchors == [
        "person_name",
        "person_address_attributes_postcode",
        "person_address_attributes_country_attributes_name",
    ]


def test_collect_emits_every_message_of_an_attribute() -> None:
    person = Person()
    person.errors.add("email_work", "blank", "Email work is required")
    person.errors.add("email_work", "invalid", "Email work is not an email address")
    entries = ErrorCollector().collect(person)
    assert [e.anchor_id for e in entries] == ["person_email_work", "person_email_work"]
    assert [e.message for e in entries] == [
        "Email work is required",
        "Email work is not an email address",
    ]


def test_collect_counts_match_every_reachable_message() -> None:
    person = Person(address=Address(country=Country()))
    person.valid()
    person.errors.add("gender", "inclusion", "Choose a gender")
    person.address.valid()
    person.address.country.valid()
    expected = sum(
        len(error_messages(entity, attribute))
        for entity in (person, person.address, person.address.country)
        for attribute in entity.errors.attributes()
    )
    assert len(ErrorCollector().collect(person)) == expected == 4


def test_collect_survives_self_reference() -> None:
    kase = Case()
    kase.state_machine = StateMachine(object=kase)
    kase.valid()
    assert ErrorCollector().collect(kase) == [ErrorEntry("case_name", "Name is required")]


def test_collect_survives_mutual_reference_with_errors_on_both_sides() -> None:
    kase = Case()
    machine = StateMachine(object=kase)
    kase.state_machine = machine
    kase.valid()
    machine.errors.add("object", "invalid", "Object is stuck")
    entries = ErrorCollector().collect(kase)
    assert entries == [
        ErrorEntry("case_name", "Name is required"),
        ErrorEntry("case_state_machine_attributes_object", "Object is stuck"),
    ]


def test_collect_sequence_field_uses_element_model_name() -> None:
    kase = Case(subcases=[Case(), Case()])
    for c in (kase, *kase.subcases):
        c.valid()
    entries = ErrorCollector().collect(kase)
    assert entries == [
        ErrorEntry("case_name", "Name is required"),
        ErrorEntry("case_case_attributes_name", "Name is required"),
        ErrorEntry("case_case_attributes_name", "Name is required"),
    ]


def test_collect_visits_shared_child_once() -> None:
    shared = Country()
    shared.valid()

    class Pair(Model):
        nested_fields = ("first", "second")

        def __init__(self) -> None:
            self.first = shared
            self.second = shared

    entries = ErrorCollector().collect(Pair())
    assert entries == [ErrorEntry("pair_first_attributes_name", "Country is required")]


def test_collect_uses_namespaced_model_name() -> None:
    penalty = Penalty()
    penalty.valid()
    assert [e.anchor_id for e in ErrorCollector().collect(penalty)] == [
        "steps_appeal_penalty_amount"
    ]


def test_collect_ignores_undeclared_fields() -> None:
    person = Person()
    person.sidekick = Country()
    person.sidekick.valid()
    assert ErrorCollector().collect(person) == []


def test_collect_is_deterministic_and_thread_safe() -> None:
    kase = Case(subcases=[Case(), Case(name="ok")])
    kase.state_machine = StateMachine(object=kase)
    for c in (kase, *kase.subcases):
        c.valid()
    collector = ErrorCollector()
    first = collector.collect(kase)
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: collector.collect(kase), range(16)))
    assert all(result == first for result in results)


def test_collect_translates_messages_for_locale() -> None:
    person = Person(address=Address(country=Country()))
    person.valid()
    person.address.valid()
    person.address.country.valid()
    entries = ErrorCollector(Translator(WELSH, locale="cy")).collect(person)
    assert entries == [
        ErrorEntry("person_name", "Mae angen enw llawn"),
        ErrorEntry("person_address_attributes_postcode", "Mae angen cod post"),
        ErrorEntry("person_address_attributes_country_attributes_name", "Mae angen Gwlad"),
    ]


def test_collect_rejects_attribute_that_cannot_anchor() -> None:
    person = Person()
    person.errors.add("bad attr!", "invalid", "Broken")
    with pytest.raises(AnchorPathError):
        ErrorCollector().collect(person)


def test_collect_propagates_collaborator_failures() -> None:
    class Exploding(Model):
        @property
        def errors(self):  # type: ignore[override]
            raise RuntimeError("validation backend down")

    with pytest.raises(RuntimeError, match="backend down"):
        ErrorCollector().collect(Exploding())


def test_object_name_sets_anchor_prefix() -> None:
    person = Person(address=Address())
    person.valid()
    person.address.valid()
    entries = ErrorCollector().collect(person, "applicant")
    assert [e.anchor_id for e in entries] == ["applicant_name", "applicant_address_attributes_postcode"]
