"""Tests for the per-version record transforms as pure functions."""

import pytest

from initiative.storage.migrations import (
    REGISTRY,
    v003_gender_nonbinary,
    v004_split_npc_age,
    v006_location_to_place,
    v007_lowercase_enums,
)


class TestRegistryContents:
    """Tests for the declared schema versions."""

    def test_versions_one_through_seven(self) -> None:
        assert REGISTRY.versions == [1, 2, 3, 4, 5, 6, 7]

    def test_transform_versions(self) -> None:
        with_transforms = [s.version for s in REGISTRY if s.has_transforms]
        assert with_transforms == [3, 4, 6, 7]

    def test_key_value_table_added_at_v2(self) -> None:
        assert "key_value" not in REGISTRY.tables_at(1)
        assert REGISTRY.tables_at(2)["key_value"].primary_key == "key"

    def test_name_unique_from_v5(self) -> None:
        assert REGISTRY.tables_at(4)["things"].unique_keys == ()
        assert "name" in REGISTRY.tables_at(4)["things"].secondary_keys
        assert REGISTRY.tables_at(5)["things"].unique_keys == ("name",)
        assert REGISTRY.latest.tables["things"].secondary_keys == ("type",)


class TestV003GenderNonBinary:
    """Tests for the v003 gender rename."""

    def test_trans_renamed(self) -> None:
        thing = {"uuid": "1", "name": "A", "type": "Npc", "gender": "Trans"}
        assert v003_gender_nonbinary.transform_thing(thing)["gender"] == "NonBinaryThey"

    def test_other_gender_unchanged(self) -> None:
        thing = {"uuid": "1", "name": "A", "type": "Npc", "gender": "Feminine"}
        assert v003_gender_nonbinary.transform_thing(thing) == thing

    def test_absent_gender_not_synthesized(self) -> None:
        thing = {"uuid": "1", "name": "A", "type": "Npc"}
        assert "gender" not in v003_gender_nonbinary.transform_thing(thing)

    def test_input_not_mutated(self) -> None:
        thing = {"uuid": "1", "name": "A", "gender": "Trans"}
        v003_gender_nonbinary.transform_thing(thing)
        assert thing["gender"] == "Trans"


class TestV004SplitNpcAge:
    """Tests for the v004 age split."""

    def test_npc_age_object_split(self) -> None:
        thing = {
            "uuid": "1",
            "name": "Old Tom",
            "type": "Npc",
            "age": {"type": "Elderly", "value": 80},
        }
        migrated = v004_split_npc_age.transform_thing(thing)
        assert migrated["age"] == "Elderly"
        assert migrated["age_years"] == 80

    def test_non_npc_untouched(self) -> None:
        thing = {"uuid": "1", "name": "X", "type": "Location", "age": {"type": "Old", "value": 3}}
        assert v004_split_npc_age.transform_thing(thing) == thing

    def test_string_age_untouched(self) -> None:
        thing = {"uuid": "1", "name": "A", "type": "Npc", "age": "Adult"}
        assert v004_split_npc_age.transform_thing(thing) == thing

    def test_absent_age_does_not_create_age_years(self) -> None:
        thing = {"uuid": "1", "name": "A", "type": "Npc"}
        assert "age_years" not in v004_split_npc_age.transform_thing(thing)

    def test_partial_age_object(self) -> None:
        """Only the parts present in the legacy object are carried over."""
        thing = {"uuid": "1", "name": "A", "type": "Npc", "age": {"type": "Child"}}
        migrated = v004_split_npc_age.transform_thing(thing)
        assert migrated["age"] == "Child"
        assert "age_years" not in migrated

    def test_zero_age_value_kept(self) -> None:
        thing = {"uuid": "1", "name": "A", "type": "Npc", "age": {"type": "Baby", "value": 0}}
        assert v004_split_npc_age.transform_thing(thing)["age_years"] == 0

    def test_unrelated_fields_preserved(self) -> None:
        thing = {
            "uuid": "1",
            "name": "A",
            "type": "Npc",
            "age": {"type": "Adult", "value": 30},
            "notes": "keeps bees",
        }
        assert v004_split_npc_age.transform_thing(thing)["notes"] == "keeps bees"


class TestV006LocationToPlace:
    """Tests for the v006 Location rename."""

    def test_location_with_nested_subtype(self) -> None:
        thing = {"uuid": "1", "name": "Inn", "type": "Location", "subtype": {"subtype": "Tavern"}}
        assert v006_location_to_place.transform_thing(thing) == {
            "uuid": "1",
            "name": "Inn",
            "type": "Place",
            "subtype": "Tavern",
        }

    def test_location_without_subtype(self) -> None:
        thing = {"uuid": "1", "name": "Field", "type": "Location"}
        migrated = v006_location_to_place.transform_thing(thing)
        assert migrated["type"] == "Place"
        assert "subtype" not in migrated

    def test_nested_subtype_without_value_kept(self) -> None:
        thing = {"uuid": "1", "name": "Hut", "type": "Location", "subtype": {"kind": "x"}}
        assert v006_location_to_place.transform_thing(thing)["subtype"] == {"kind": "x"}

    def test_other_types_untouched(self) -> None:
        thing = {"uuid": "1", "name": "Bob", "type": "Npc", "subtype": {"subtype": "Guard"}}
        assert v006_location_to_place.transform_thing(thing) == thing


class TestV007LowercaseEnums:
    """Tests for the v007 lowercase normalisation."""

    @pytest.mark.parametrize(
        ("age", "expected"),
        [
            ("YoungAdult", "young-adult"),
            ("MiddleAged", "middle-aged"),
            ("Elderly", "elderly"),
            ("Child", "child"),
        ],
    )
    def test_age(self, age: str, expected: str) -> None:
        assert v007_lowercase_enums.transform_thing({"age": age})["age"] == expected

    @pytest.mark.parametrize(
        ("species", "expected"),
        [("HalfElf", "half-elf"), ("HalfOrc", "half-orc"), ("Dwarf", "dwarf")],
    )
    def test_species(self, species: str, expected: str) -> None:
        assert v007_lowercase_enums.transform_thing({"species": species})["species"] == expected

    def test_gender(self) -> None:
        transform = v007_lowercase_enums.transform_thing
        assert transform({"gender": "NonBinaryThey"})["gender"] == "non-binary"
        assert transform({"gender": "Masculine"})["gender"] == "masculine"

    def test_ethnicity_and_subtype_lowercased(self) -> None:
        migrated = v007_lowercase_enums.transform_thing(
            {"ethnicity": "Elvish", "subtype": "Tavern"}
        )
        assert migrated == {"ethnicity": "elvish", "subtype": "tavern"}

    def test_absent_fields_stay_absent(self) -> None:
        thing = {"uuid": "1", "name": "Bare", "type": "Npc"}
        assert v007_lowercase_enums.transform_thing(thing) == thing

    def test_non_string_values_left_alone(self) -> None:
        thing = {"age": {"type": "Adult"}, "subtype": None}
        assert v007_lowercase_enums.transform_thing(thing) == thing

    def test_name_not_touched(self) -> None:
        thing = {"name": "Mixed Case Name", "type": "Npc"}
        assert v007_lowercase_enums.transform_thing(thing)["name"] == "Mixed Case Name"


class TestIdempotence:
    """Applying any transform twice equals applying it once."""

    @pytest.mark.parametrize(
        "thing",
        [
            {"uuid": "1", "name": "A", "type": "Npc", "gender": "Trans"},
            {"uuid": "2", "name": "B", "type": "Npc", "age": {"type": "YoungAdult", "value": 20}},
            {"uuid": "3", "name": "C", "type": "Location", "subtype": {"subtype": "Shop"}},
            {"uuid": "4", "name": "D", "type": "Npc", "species": "HalfElf", "age": "MiddleAged"},
        ],
    )
    def test_every_transform_is_idempotent(self, thing: dict) -> None:
        for schema in REGISTRY:
            for transform in schema.transforms.values():
                once = transform(thing)
                assert transform(once) == once

    def test_full_chain_is_stable(self) -> None:
        thing = {"uuid": "1", "name": "A", "type": "Npc", "gender": "Trans"}
        for schema in REGISTRY:
            for transform in schema.transforms.values():
                thing = transform(thing)
        assert thing["gender"] == "non-binary"

        again = thing
        for schema in REGISTRY:
            for transform in schema.transforms.values():
                again = transform(again)
        assert again == thing


class TestUnrecognisedShapes:
    """Shapes no transform recognises pass through the whole chain unchanged."""

    def test_full_chain_leaves_odd_shapes_alone(self) -> None:
        thing = {
            "uuid": "1",
            "name": "Crate",
            "type": "Item",
            "age": {"category": "old"},
            "gender": 3,
            "subtype": ["box", "wooden"],
            "species": None,
        }
        migrated = thing
        for schema in REGISTRY:
            for transform in schema.transforms.values():
                migrated = transform(migrated)

        assert migrated == thing
