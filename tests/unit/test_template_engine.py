"""Unit tests for secret template rendering"""

import pytest

from secretsync.exceptions import TemplateExecutionError, TemplateParseError
from secretsync.template.context import TemplateContext
from secretsync.template.engine import TemplateEvaluator, index, process_template


@pytest.fixture
def ctx():
    """Template context with flat, sectioned and by-ID views"""
    return TemplateContext(
        fields={
            "username": "testuser",
            "password": "testpass",
            "endpoint": "https://example.com",
            "api-key": "k-123",
            "items": "shadowed",
        },
        sections={
            "Credentials": {
                "username": "testuser",
                "password": "testpass",
            },
        },
        fields_by_id={
            "field-1": "testuser",
            "field-2": "testpass",
        },
    )


class TestProcessTemplate:
    """Test rendering templates against item views"""

    @pytest.mark.parametrize("template, expected", [
        ("username: {{ Fields.username }}", "username: testuser"),
        (
            "provider: AWS\nusername: {{ Fields.username }}\npassword: {{ Fields.password }}",
            "provider: AWS\nusername: testuser\npassword: testpass",
        ),
        ('user: {{ index(Sections, "Credentials", "username") }}', "user: testuser"),
        ('user: {{ index(FieldsByID, "field-1") }}', "user: testuser"),
        ('user: {{ Sections.Credentials.username }}', "user: testuser"),
        ('key: {{ Fields["api-key"] }}', "key: k-123"),
        (
            "endpoint: {{ Fields.endpoint }}\ncredentials:\n  username: {{ Fields.username }}\n"
            "  password: {{ Fields.password }}",
            "endpoint: https://example.com\ncredentials:\n  username: testuser\n  password: testpass",
        ),
    ])
    def test_render(self, ctx, template, expected):
        """Test field, section and by-ID access"""
        assert process_template(template, ctx) == expected.encode()

    def test_returns_bytes(self, ctx):
        """Test output is UTF-8 bytes"""
        result = process_template("pässword={{ Fields.password }}", ctx)

        assert result == "pässword=testpass".encode("utf-8")

    def test_missing_key_renders_empty(self, ctx):
        """Test absent keys in an existing view render as empty strings"""
        assert process_template("[{{ Fields.missing }}]", ctx) == b"[]"
        assert process_template('[{{ index(FieldsByID, "nope") }}]', ctx) == b"[]"
        assert process_template('[{{ index(Sections, "Nope", "username") }}]', ctx) == b"[]"

    def test_mapping_keys_shadow_methods(self, ctx):
        """Test a field labeled like a dict method resolves to the field"""
        assert process_template("{{ Fields.items }}", ctx) == b"shadowed"
        assert process_template('{{ Fields["items"] }}', ctx) == b"shadowed"

    def test_trailing_newline_preserved(self, ctx):
        """Test trailing newlines are kept"""
        assert process_template("{{ Fields.username }}\n", ctx) == b"testuser\n"

    def test_unknown_top_level_name(self, ctx):
        """Test referencing a name outside the three views fails"""
        with pytest.raises(TemplateExecutionError) as exc_info:
            process_template("{{ InvalidField }}", ctx)

        assert "InvalidField" in str(exc_info.value)

    def test_unknown_top_level_name_in_condition(self, ctx):
        """Test unknown names also fail when only tested for truth"""
        with pytest.raises(TemplateExecutionError):
            process_template("{% if Missing %}x{% endif %}", ctx)

    @pytest.mark.parametrize("template", [
        "{{ range }}",
        "{{ range(3) }}",
        "{{ dict }}",
        "{{ dict(a=1) }}",
        "{{ lipsum }}",
        "{{ lipsum(1) }}",
        "{{ cycler }}",
        "{{ joiner }}",
        "{{ namespace }}",
    ])
    def test_jinja_builtin_globals_unavailable(self, ctx, template):
        """Test Jinja2's default globals are not addressable names"""
        with pytest.raises(TemplateExecutionError):
            process_template(template, ctx)

    def test_attribute_of_value_fails(self, ctx):
        """Test dotted access on a plain field value fails"""
        with pytest.raises(TemplateExecutionError):
            process_template("{{ Fields.username.foo }}", ctx)

    def test_attribute_of_missing_key_fails(self, ctx):
        """Test dotted access past a missing key fails"""
        with pytest.raises(TemplateExecutionError):
            process_template("{{ Fields.missing.foo }}", ctx)

    def test_index_into_string_fails(self, ctx):
        """Test indexing past a value fails"""
        with pytest.raises(TemplateExecutionError):
            process_template('{{ index(Fields, "username", "deeper") }}', ctx)

    def test_invalid_syntax(self, ctx):
        """Test malformed templates raise a parse error"""
        with pytest.raises(TemplateParseError) as exc_info:
            process_template("{{ Fields.username }", ctx)

        assert exc_info.value.lineno == 1

    def test_unclosed_block(self, ctx):
        """Test unclosed blocks raise a parse error"""
        with pytest.raises(TemplateParseError):
            process_template("{% if Fields.username %}open", ctx)

    def test_sandbox_blocks_internals(self, ctx):
        """Test templates cannot reach Python internals"""
        with pytest.raises(TemplateExecutionError):
            process_template("{{ Fields.username.__class__ }}", ctx)


class TestTemplateEvaluator:
    """Test evaluator construction"""

    def test_index_registered(self):
        """Test index is available as a template global"""
        evaluator = TemplateEvaluator()

        assert evaluator.environment.globals == {"index": index}

    def test_evaluators_independent(self, ctx):
        """Test separate evaluators render identically"""
        assert TemplateEvaluator().process("{{ Fields.username }}", ctx) == b"testuser"


class TestIndex:
    """Test the index helper directly"""

    def test_nested(self):
        """Test walking nested mappings"""
        assert index({"a": {"b": "c"}}, "a", "b") == "c"

    def test_missing(self):
        """Test missing keys return an empty string"""
        assert index({"a": {}}, "a", "b") == ""
        assert index({}, "a", "b") == ""

    def test_no_keys(self):
        """Test index with no keys returns the container"""
        container = {"a": "b"}
        assert index(container) is container

    def test_non_mapping(self):
        """Test indexing a scalar raises TypeError"""
        with pytest.raises(TypeError):
            index("value", "a")
