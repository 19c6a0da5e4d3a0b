import pytest

from observable_default.core.diagnostics import DiagnosticID, ExpansionError
from observable_default.core.expansion import expand, expand_all
from observable_default.core.resolver import StoreDefaults
from observable_default.core.syntax import BindingSpecifier, Identifier, MemberAccess
from observable_default.state import ExpansionSettings, configure

from builders import DIRECTIVE_AT, INT, OPTIONAL_STR, STR, labeled, var


def test_expand_runs_whole_pipeline():
    expansion = expand(var("age", INT, initializer=0, arguments=labeled(store=MemberAccess(None, "shared"))))
    assert expansion.prop.name == "age"
    assert expansion.arguments.store_arg == MemberAccess(None, "shared")
    assert expansion.spec.store.expression == MemberAccess(Identifier("Defaults"), "shared")
    assert expansion.fragments.property_name == "age"
    assert expansion.fragments.store == "Defaults.shared"


@pytest.mark.parametrize("decl, expected", [
    (var(specifier=BindingSpecifier.LET), DiagnosticID.NOT_VARIABLE_PROPERTY),
    (var("name", STR), DiagnosticID.NON_OPTIONAL_TYPE_REQUIRES_DEFAULT_VALUE),
    (var("name", OPTIONAL_STR, arguments=labeled(defaultValue="x")),
     DiagnosticID.OPTIONAL_TYPE_MUST_NOT_HAVE_EXPLICIT_DEFAULT),
    (var("name", OPTIONAL_STR, arguments=labeled(suite="x")), DiagnosticID.MALFORMED_ARGUMENT_LIST),
])
def test_expand_reports_single_diagnostic(decl, expected):
    with pytest.raises(ExpansionError) as exc:
        expand(decl)
    assert exc.value.ids == [expected]
    assert exc.value.diagnostics[0].location == DIRECTIVE_AT


def test_malformed_arguments_win_over_default_checks():
    # Bad argument list on a non-optional without default: the parser runs first
    decl = var("name", STR, arguments=labeled(bogus=1))
    with pytest.raises(ExpansionError) as exc:
        expand(decl)
    assert exc.value.ids == [DiagnosticID.MALFORMED_ARGUMENT_LIST]


def test_expand_all_keeps_declarations_independent():
    report = expand_all([
        var("name", OPTIONAL_STR),
        var("nickname", STR),
        var("age", INT, initializer=0),
        var("id", specifier=BindingSpecifier.LET),
    ])
    assert not report.ok
    assert [f.property_name for f in report.fragments] == ["name", "age"]
    assert [d.id for d in report.diagnostics] == [
        DiagnosticID.NON_OPTIONAL_TYPE_REQUIRES_DEFAULT_VALUE,
        DiagnosticID.NOT_VARIABLE_PROPERTY,
    ]


def test_expand_all_success():
    report = expand_all([var("name", OPTIONAL_STR)])
    assert report.ok
    assert len(report.fragments) == 1


def test_directive_name_appears_in_messages():
    settings = ExpansionSettings(directive_name="persisted")
    with pytest.raises(ExpansionError) as exc:
        expand(var(specifier=BindingSpecifier.LET), settings)
    assert exc.value.diagnostics[0].message.startswith("'persisted'")


def test_module_settings_are_used_by_default():
    configure(default_store_type="Prefs")
    assert expand(var("name", OPTIONAL_STR)).fragments.store == "Prefs.standard"


def test_store_defaults_override_settings():
    expansion = expand(var("name", OPTIONAL_STR), store_defaults=StoreDefaults(type_name="Scratch"))
    assert expansion.fragments.store == "Scratch.standard"


def test_error_message_lists_diagnostics():
    with pytest.raises(ExpansionError) as exc:
        expand(var("name", STR))
    assert "NonOptionalTypeRequiresDefaultValue" in str(exc.value)
    assert "person.py:3:5" in str(exc.value)
