"""Tests for the TemplateUnit model and class generation."""

from dataclasses import FrozenInstanceError
from pathlib import Path
from unittest.mock import patch

import pytest

from phpgen.errors import WriteFailure
from phpgen.models import NO_DEFAULT, ArgumentSpec, ConstSpec, FieldSpec, MethodSpec
from phpgen.template import TemplateUnit, create_template

USER_PHP = (
    "<?php\n"
    "\n"
    "declare(strict_types=1);\n"
    "\n"
    "namespace App\\Models;\n"
    "\n"
    "use App\\Contracts\\Arrayable;\n"
    "\n"
    "class User extends Model\n"
    "{\n"
    "\tprotected string $name;\n"
    "\n"
    "\tpublic function getName(): string {\n"
    "\t\treturn $this->name;\n"
    "\t}\n"
    "}\n"
)


def _user_unit() -> TemplateUnit:
    return (
        TemplateUnit()
        .with_namespace("App\\Models")
        .with_packages(["App\\Contracts\\Arrayable"])
        .with_name("User")
        .with_extends("Model")
        .with_field(FieldSpec(name="name", visibility="protected", type_hint="string"))
        .with_method(
            MethodSpec(
                name="getName",
                visibility="public",
                return_type="string",
                body="return $this->name;",
            )
        )
    )


class TestImmutability:
    """Tests for copy-on-write behaviour."""

    def test_with_returns_new_instance(self) -> None:
        """Test that with_* leaves the receiver untouched."""
        base = TemplateUnit()
        named = base.with_namespace("App")

        assert named is not base
        assert base.namespace is None
        assert named.namespace == "App"

    def test_append_does_not_leak_into_predecessor(self) -> None:
        """Test that appending to a successor leaves earlier units unchanged."""
        first = TemplateUnit().with_field(FieldSpec(name="a"))
        second = first.with_field(FieldSpec(name="b"))

        assert [f.name for f in first.fields] == ["a"]
        assert [f.name for f in second.fields] == ["a", "b"]

    def test_sequence_arguments_are_copied(self) -> None:
        """Test that later changes to the caller's list are not seen."""
        packages = ["A"]
        unit = TemplateUnit().with_packages(packages)
        packages.append("B")

        assert unit.packages == ("A",)

    def test_default_value_is_copied(self) -> None:
        """Test that mutable defaults are detached from the caller."""
        default = [1, 2]
        field = FieldSpec(name="items", default=default)
        default.append(3)

        assert field.default == [1, 2]

    def test_unit_is_frozen(self) -> None:
        """Test that attributes cannot be assigned."""
        unit = TemplateUnit()
        with pytest.raises(FrozenInstanceError):
            unit.namespace = "X"  # type: ignore[misc]

    def test_all_fields_are_carried_over(self) -> None:
        """Test that a with_* call keeps every other attribute."""
        unit = _user_unit().with_implements("JsonSerializable").with_traits(["T"])
        changed = unit.with_extends("Base")

        assert changed.namespace == unit.namespace
        assert changed.packages == unit.packages
        assert changed.fields == unit.fields
        assert changed.methods == unit.methods
        assert changed.traits == ("T",)
        assert changed.implements == "JsonSerializable"
        assert changed.extends == "Base"


class TestBuilders:
    """Tests for the keyword builders and single-entry appends."""

    def test_with_variable_defaults(self) -> None:
        """Test that with_variable defaults to a protected mixed property."""
        unit = TemplateUnit().with_variable("data")
        field = unit.fields[0]

        assert field.visibility == "protected"
        assert field.type_hint == "mixed"
        assert field.is_static is False
        assert field.default is NO_DEFAULT

    def test_with_const(self) -> None:
        """Test the constant builder."""
        unit = TemplateUnit().with_const("VERSION", default="1.0")
        assert unit.constants == (ConstSpec(name="VERSION", default="1.0"),)

    def test_with_new_method(self) -> None:
        """Test the method builder defaults to a public stub."""
        unit = TemplateUnit().with_new_method("handle")
        method = unit.methods[0]

        assert method.visibility == "public"
        assert method.body == "//"
        assert method.arguments == ()

    def test_with_package_and_trait_append(self) -> None:
        """Test single package and trait appends keep order and duplicates."""
        unit = TemplateUnit().with_package("A").with_package("A").with_trait("T")
        assert unit.packages == ("A", "A")
        assert unit.traits == ("T",)

    def test_bare_string_is_one_name(self) -> None:
        """Test that a single package or trait string is not split into characters."""
        unit = TemplateUnit().with_packages("App\\X").with_traits("HasName")
        assert unit.packages == ("App\\X",)
        assert unit.traits == ("HasName",)
        assert TemplateUnit(packages="App\\Y").packages == ("App\\Y",)
        assert create_template(traits="T").traits == ("T",)
        assert "use App\\X;\n\n" in unit.with_name("Foo").generate().generated_text

    def test_create_template(self) -> None:
        """Test the factory function."""
        unit = create_template(
            namespace="App", packages=["X"], traits=["T"], class_name="Foo"
        )
        assert unit.namespace == "App"
        assert unit.packages == ("X",)
        assert unit.traits == ("T",)
        assert unit.class_name == "Foo"
        assert unit.fields == ()


class TestMethodLookup:
    """Tests for find_method, with_argument and with_arguments."""

    def _unit(self) -> TemplateUnit:
        return (
            TemplateUnit()
            .with_new_method("foo", return_type="int", visibility="protected")
            .with_new_method("bar", arguments=[ArgumentSpec(name="x")])
            .with_new_method("baz")
        )

    def test_find_method(self) -> None:
        """Test lookup by name."""
        method = self._unit().find_method("bar")
        assert method is not None
        assert method.name == "bar"

    def test_find_method_missing_returns_none(self) -> None:
        """Test that a missing method is not an error."""
        assert self._unit().find_method("nope") is None

    def test_find_method_first_match_wins(self) -> None:
        """Test that duplicate names resolve to the earliest entry."""
        unit = (
            TemplateUnit()
            .with_new_method("dup", return_type="int")
            .with_new_method("dup", return_type="string")
        )
        method = unit.find_method("dup")
        assert method is not None
        assert method.return_type == "int"

    def test_with_argument_appends_in_place(self) -> None:
        """Test that only the located method changes and order is kept."""
        unit = self._unit()
        updated = unit.with_argument("foo", "int", "id", 0)

        assert [m.name for m in updated.methods] == ["foo", "bar", "baz"]
        foo = updated.methods[0]
        assert foo.arguments == (ArgumentSpec(name="id", type_hint="int", default=0),)
        assert foo.return_type == "int"
        assert foo.visibility == "protected"
        assert updated.methods[1] == unit.methods[1]
        assert updated.methods[2] == unit.methods[2]

    def test_with_argument_on_later_method_keeps_first(self) -> None:
        """Test that an earlier, unrelated method is never dropped."""
        updated = self._unit().with_argument("baz", None, "flag")

        assert len(updated.methods) == 3
        assert updated.methods[0].name == "foo"
        assert updated.methods[2].arguments == (ArgumentSpec(name="flag"),)

    def test_with_argument_appends_after_existing(self) -> None:
        """Test that new arguments go after existing ones."""
        updated = self._unit().with_argument("bar", "string", "y")
        assert [a.name for a in updated.methods[1].arguments] == ["x", "y"]

    def test_with_argument_missing_method(self) -> None:
        """Test that an unknown method name changes nothing."""
        unit = self._unit()
        updated = unit.with_argument("nope", "int", "id")

        assert updated == unit
        assert updated is not unit

    def test_with_argument_leaves_original(self) -> None:
        """Test that the receiver keeps its old argument list."""
        unit = self._unit()
        unit.with_argument("foo", "int", "id")
        assert unit.methods[0].arguments == ()

    def test_with_arguments_replaces_list(self) -> None:
        """Test replacing a method's arguments."""
        updated = self._unit().with_arguments("bar", [ArgumentSpec(name="z")])
        assert updated.methods[1].arguments == (ArgumentSpec(name="z"),)


class TestGenerate:
    """Tests for generate() and the output text."""

    def test_end_to_end_user_class(self) -> None:
        """Test the complete User class output."""
        assert _user_unit().generate().generated_text == USER_PHP

    def test_generate_is_idempotent(self) -> None:
        """Test that generating twice gives identical text."""
        unit = _user_unit()
        assert unit.generate().generated_text == unit.generate().generated_text

    def test_generate_does_not_touch_receiver(self) -> None:
        """Test that the building-state unit stays empty."""
        unit = _user_unit()
        generated = unit.generate()

        assert unit.generated_text == ""
        assert not unit.is_generated
        assert generated.is_generated

    def test_with_after_generate_keeps_stale_text(self) -> None:
        """Test that with_* does not refresh generated text."""
        generated = _user_unit().generate()
        changed = generated.with_extends("Base")

        assert changed.generated_text == generated.generated_text
        assert "extends Base" in changed.generate().generated_text

    def test_minimal_class(self) -> None:
        """Test a class with nothing but a name."""
        text = TemplateUnit().with_name("Empty").generate().generated_text
        assert text == "<?php\n\ndeclare(strict_types=1);\n\nclass Empty\n{\n}\n"

    def test_empty_blocks_are_omitted(self) -> None:
        """Test that only the field block is emitted for a field-only class."""
        text = (
            TemplateUnit()
            .with_name("Dto")
            .with_variable("id", visibility="public", type_hint="int")
            .generate()
            .generated_text
        )
        assert text.endswith("class Dto\n{\n\tpublic int $id;\n}\n")
        assert "use " not in text
        assert "function" not in text
        assert "namespace" not in text

    def test_field_order_is_preserved(self) -> None:
        """Test that fields appear in the order they were added."""
        names = ["zeta", "alpha", "mid", "beta"]
        unit = TemplateUnit().with_name("X")
        for name in names:
            unit = unit.with_variable(name, type_hint="")
        text = unit.generate().generated_text

        positions = [text.index(f"${name};") for name in names]
        assert positions == sorted(positions)
        assert "\tprotected $zeta;\n\tprotected $alpha;\n" in text

    def test_null_default_and_no_default_differ(self) -> None:
        """Test that `= null` is only emitted for an explicit None default."""
        text = (
            TemplateUnit()
            .with_name("X")
            .with_variable("a", type_hint="?int", default=None)
            .with_variable("b", type_hint="?int")
            .generate()
            .generated_text
        )
        assert "\tprotected ?int $a = null;\n" in text
        assert "\tprotected ?int $b;\n" in text

    def test_block_order_and_spacing(self) -> None:
        """Test traits, constants, fields and methods each separated by one blank line."""
        text = (
            TemplateUnit()
            .with_name("Post")
            .with_implements("Countable")
            .with_traits(["HasFactory", "SoftDeletes"])
            .with_const("TABLE", default="posts")
            .with_variable("title", type_hint="string")
            .with_new_method("count", return_type="int", body="return 0;")
            .with_new_method("boot", is_static=True)
            .generate()
            .generated_text
        )
        expected_body = (
            "class Post implements Countable\n"
            "{\n"
            "\tuse HasFactory;use SoftDeletes;\n"
            "\n"
            '\tpublic const TABLE = "posts";\n'
            "\n"
            "\tprotected string $title;\n"
            "\n"
            "\tpublic function count(): int {\n"
            "\t\treturn 0;\n"
            "\t}\n"
            "\tpublic static function boot() {\n"
            "\t\t//\n"
            "\t}\n"
            "}\n"
        )
        assert text.endswith(expected_body)

    def test_with_content_file(self) -> None:
        """Test that hand-built text replaces generated text verbatim."""
        unit = TemplateUnit().with_content_file("<?php\nreturn [];\n")
        assert unit.generated_text == "<?php\nreturn [];\n"


class TestSave:
    """Tests for save()."""

    def test_save_reports_byte_length(self, tmp_path: Path) -> None:
        """Test that save writes the text and returns its byte length."""
        target = tmp_path / "User.php"
        written = _user_unit().generate().save(target)

        assert written == len(USER_PHP.encode("utf-8"))
        assert target.read_bytes() == USER_PHP.encode("utf-8")

    def test_save_counts_utf8_bytes(self, tmp_path: Path) -> None:
        """Test that non-ASCII text is counted in bytes, not characters."""
        unit = TemplateUnit().with_content_file("é")
        assert unit.save(tmp_path / "x.php") == 2

    def test_save_propagates_write_failure(self, tmp_path: Path) -> None:
        """Test that a filesystem error surfaces as WriteFailure."""
        with patch("phpgen.fs.Path.write_bytes", side_effect=PermissionError(13, "denied")):
            with pytest.raises(WriteFailure) as exc_info:
                TemplateUnit().with_content_file("x").save(tmp_path / "x.php")
        assert exc_info.value.reason == "denied"

    def test_save_unencodable_text(self, tmp_path: Path) -> None:
        """Test that a lone surrogate in a default raises WriteFailure."""
        unit = TemplateUnit().with_name("X").with_const("A", default="\ud800").generate()
        with pytest.raises(WriteFailure, match="UTF-8"):
            unit.save(tmp_path / "X.php")
        assert not (tmp_path / "X.php").exists()
