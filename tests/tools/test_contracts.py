"""Tests for the tool argument contracts."""

import pytest
from pydantic import ValidationError

from todo_mcp.tools.contracts import (
    CreateTodoArgs,
    DeleteTodoArgs,
    ListTodoArgs,
    UpdateTodoArgs,
    describe_validation_error,
)


class TestCreateTodoArgs:
    def test_defaults(self) -> None:
        args = CreateTodoArgs.model_validate({"title": "Buy milk"})
        assert args.title == "Buy milk"
        assert args.completed is False

    def test_extra_fields_ignored(self) -> None:
        args = CreateTodoArgs.model_validate({"title": "Buy milk", "priority": "high"})
        assert not hasattr(args, "priority")

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_blank_title_rejected(self, title: str) -> None:
        with pytest.raises(ValidationError):
            CreateTodoArgs.model_validate({"title": title})

    def test_types_are_strict(self) -> None:
        with pytest.raises(ValidationError):
            CreateTodoArgs.model_validate({"title": "Buy milk", "completed": "true"})
        with pytest.raises(ValidationError):
            CreateTodoArgs.model_validate({"title": 42})

    def test_schema(self) -> None:
        schema = CreateTodoArgs.model_json_schema()
        assert schema["type"] == "object"
        assert schema["required"] == ["title"]
        assert schema["properties"]["title"]["type"] == "string"
        assert schema["properties"]["completed"]["type"] == "boolean"
        assert schema["properties"]["completed"]["default"] is False


class TestUpdateTodoArgs:
    def test_only_id_required(self) -> None:
        args = UpdateTodoArgs.model_validate({"id": "abc"})
        assert args.title is None
        assert args.completed is None

    def test_null_fields_mean_absent(self) -> None:
        args = UpdateTodoArgs.model_validate({"id": "abc", "title": None, "completed": None})
        assert args.title is None
        assert args.completed is None

    def test_blank_title_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UpdateTodoArgs.model_validate({"id": "abc", "title": "  "})

    def test_blank_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UpdateTodoArgs.model_validate({"id": ""})


class TestOtherArgs:
    def test_list_accepts_anything_extra(self) -> None:
        ListTodoArgs.model_validate({"whatever": 1})

    def test_delete_requires_id(self) -> None:
        with pytest.raises(ValidationError):
            DeleteTodoArgs.model_validate({})


class TestDescribeValidationError:
    def test_missing_field(self) -> None:
        with pytest.raises(ValidationError) as info:
            CreateTodoArgs.model_validate({})
        assert describe_validation_error(info.value) == "Missing required field: title"

    def test_wrong_type(self) -> None:
        with pytest.raises(ValidationError) as info:
            CreateTodoArgs.model_validate({"title": "x", "completed": "yes"})
        message = describe_validation_error(info.value)
        assert message.startswith("Invalid field 'completed':")

    def test_blank(self) -> None:
        with pytest.raises(ValidationError) as info:
            CreateTodoArgs.model_validate({"title": " "})
        assert "must not be blank" in describe_validation_error(info.value)

    def test_not_an_object(self) -> None:
        with pytest.raises(ValidationError) as info:
            CreateTodoArgs.model_validate(["Buy milk"])
        assert describe_validation_error(info.value).startswith("Invalid field 'arguments':")
