# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 metadelta
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, see <https://www.gnu.org/licenses/>.
#  */
# -----------------------------------------------------------------------------

import asyncio

import pytest

from metadelta.core.classifier.diff_line_classifier import (
    DiffLineClassifier,
    line_marker,
)
from metadelta.core.data.models import ClassifierState
from metadelta.core.registry.models import MetadataDescriptor
from metadelta.core.registry.registry import MetadataRegistry

# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def labels_registry():
    return MetadataRegistry(
        [
            MetadataDescriptor(type="CustomLabels", directory_label="CustomLabels"),
            MetadataDescriptor(
                type="CustomLabel",
                directory_label="CustomLabels.labels",
                xml_tag="labels",
                parent_type="CustomLabels",
            ),
        ]
    )


@pytest.fixture
def classifier(labels_registry):
    return DiffLineClassifier(labels_registry, "CustomLabels")


@pytest.fixture
def workflow_classifier():
    return DiffLineClassifier(MetadataRegistry.default(), "workflows")


# -----------------------------------------------------------------------------
# Marker Tests
# -----------------------------------------------------------------------------


def test_line_marker():
    assert line_marker("+    <value>a</value>") == "+"
    assert line_marker("-    <value>a</value>") == "-"
    assert line_marker("  -<value>a</value>") == "-"
    assert line_marker("     <value>a</value>") is None
    assert line_marker("") is None


def test_line_marker_first_column_only():
    assert line_marker("+<value>a</value>", indented=False) == "+"
    assert line_marker("-<value>a</value>", indented=False) == "-"
    assert line_marker(" - first item</value>", indented=False) is None
    assert line_marker("  +<value>a</value>", indented=False) is None


# -----------------------------------------------------------------------------
# Classification Tests
# -----------------------------------------------------------------------------


def test_removed_fullname_is_recorded_as_removed(classifier):
    lines = [" <labels>", "-    <fullName>Old</fullName>", " </labels>"]

    state = classifier.classify(lines)

    assert state.removed == {"CustomLabels.labels": {"Old"}}
    assert state.added == {}


def test_removed_and_added_fullname_is_in_both_maps(classifier):
    lines = [
        " <labels>",
        "-    <fullName>X</fullName>",
        "+    <fullName>X</fullName>",
        "+    <value>new</value>",
        " </labels>",
    ]

    state = classifier.classify(lines)

    assert state.removed == {"CustomLabels.labels": {"X"}}
    assert state.added == {"CustomLabels.labels": {"X"}}


def test_changed_body_line_records_entity_as_added(classifier):
    lines = [
        " <labels>",
        "     <fullName>Greeting</fullName>",
        "     <language>en_US</language>",
        "-    <value>Hello</value>",
        "+    <value>Hi</value>",
        " </labels>",
    ]

    state = classifier.classify(lines)

    assert state.added == {"CustomLabels.labels": {"Greeting"}}
    assert state.removed == {}


def test_whole_entity_added(classifier):
    lines = [
        "+<labels>",
        "+    <fullName>New</fullName>",
        "+    <value>v</value>",
        "+</labels>",
    ]

    state = classifier.classify(lines)

    assert state.added == {"CustomLabels.labels": {"New"}}
    assert state.removed == {}


def test_context_lines_alone_emit_nothing(classifier):
    lines = [
        " <labels>",
        "     <fullName>Untouched</fullName>",
        "     <value>v</value>",
        " </labels>",
    ]

    state = classifier.classify(lines)

    assert state.added == {}
    assert state.removed == {}
    # identity is kept until a changed line shows up
    assert state.full_name == "Untouched"


def test_new_open_tag_discards_stale_name(classifier):
    lines = [
        " <labels>",
        "     <fullName>First</fullName>",
        " </labels>",
        " <labels>",
        "+    <value>orphan</value>",
        "     <fullName>Second</fullName>",
        "+    <value>changed</value>",
        " </labels>",
    ]

    state = classifier.classify(lines)

    assert state.added == {"CustomLabels.labels": {"Second"}}


def test_multiple_entities_in_one_diff(classifier):
    lines = [
        " <labels>",
        "-    <fullName>Gone</fullName>",
        "-    <value>g</value>",
        "-</labels>",
        " <labels>",
        "     <fullName>Kept</fullName>",
        "+    <value>k2</value>",
        " </labels>",
        "+<labels>",
        "+    <fullName>Fresh</fullName>",
        "+</labels>",
    ]

    state = classifier.classify(lines)

    assert state.removed == {"CustomLabels.labels": {"Gone"}}
    assert state.added == {"CustomLabels.labels": {"Kept", "Fresh"}}


def test_fullname_before_any_entity_tag_is_ignored(classifier):
    lines = ["-    <fullName>Nowhere</fullName>", "+    <value>x</value>"]

    state = classifier.classify(lines)

    assert state.added == {}
    assert state.removed == {}


def test_unknown_tag_is_not_an_entity_open(classifier):
    lines = [
        " <labels>",
        "     <fullName>Known</fullName>",
        " <categories>",
        "+    <value>x</value>",
    ]

    state = classifier.classify(lines)

    # <categories> is not an entity tag, the open entity is still "Known"
    assert state.added == {"CustomLabels.labels": {"Known"}}


def test_tag_with_attributes_or_namespace_is_not_an_entity_open(classifier):
    for line in ['+<labels xmlns="urn">', "+<ns:labels>", "+<labels/>", "+</labels>"]:
        state = classifier.step(ClassifierState(), line)
        assert state.potential_tag is None


def test_qualified_type_uses_file_directory_label(workflow_classifier):
    lines = [
        " <alerts>",
        "-    <fullName>Notify</fullName>",
        " </alerts>",
        " <rules>",
        "     <fullName>Escalate</fullName>",
        "+    <active>true</active>",
        " </rules>",
    ]

    state = workflow_classifier.classify(lines)

    assert state.removed == {"workflows.alerts": {"Notify"}}
    assert state.added == {"workflows.rules": {"Escalate"}}


def test_escaped_fullname_is_unescaped(classifier):
    lines = [" <labels>", "-    <fullName>A&amp;B</fullName>"]

    state = classifier.classify(lines)

    assert state.removed == {"CustomLabels.labels": {"A&B"}}


def test_classification_is_idempotent(classifier):
    lines = [
        " <labels>",
        "-    <fullName>X</fullName>",
        "+    <fullName>Y</fullName>",
        " </labels>",
    ]

    first = classifier.classify(lines)
    second = classifier.classify(lines)

    assert (first.added, first.removed) == (second.added, second.removed)


def test_async_classification_matches_sync(classifier):
    lines = [
        " <labels>",
        "-    <fullName>X</fullName>",
        "+    <fullName>X</fullName>",
        "+    <value>new</value>",
    ]

    async def produce():
        for line in lines:
            yield line

    state = asyncio.run(classifier.aclassify(produce()))
    expected = classifier.classify(lines)

    assert state.added == expected.added
    assert state.removed == expected.removed


def test_context_text_starting_with_dash_is_not_a_change(labels_registry):
    classifier = DiffLineClassifier(
        labels_registry, "CustomLabels", indented_markers=False
    )
    lines = [
        " <labels>",
        "     <fullName>Untouched</fullName>",
        "     <value>Items:",
        " - first item</value>",
        " </labels>",
    ]

    state = classifier.classify(lines)

    assert state.added == {}
    assert state.removed == {}


def test_first_column_markers_still_classify(labels_registry):
    classifier = DiffLineClassifier(
        labels_registry, "CustomLabels", indented_markers=False
    )
    lines = [
        " <labels>",
        "-    <fullName>X</fullName>",
        "+    <fullName>X</fullName>",
        "+    <value>- new item</value>",
        " </labels>",
    ]

    state = classifier.classify(lines)

    assert state.removed == {"CustomLabels.labels": {"X"}}
    assert state.added == {"CustomLabels.labels": {"X"}}
