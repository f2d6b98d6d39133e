from lox.diagnostics import Diagnostics
from lox.sema.resolver import Resolver

from helpers import analyze, errors_of, run_source


def test_local_distances_ok():
    src = r"""
    {
      var a = 1;
      {
        print a;
      }
    }
    """
    analysis = analyze(src)
    assert analysis.diagnostics.errors == []
    outer = analysis.statements[0]
    inner_print = outer.statements[1].statements[0]
    assert analysis.locals[inner_print.expression] == 1


def test_globals_are_not_recorded_ok():
    analysis = analyze("var a = 1; print a; { print a; }")
    assert analysis.diagnostics.errors == []
    assert analysis.locals == {}


def test_parameters_and_closures_distances_ok():
    src = r"""
    fun outer(x) {
      fun inner() { return x; }
      return inner;
    }
    """
    analysis = analyze(src)
    outer = analysis.statements[0]
    inner = outer.body[0]
    ret_x = inner.body[0].value
    ret_inner = outer.body[1].value
    assert analysis.locals[ret_x] == 1
    assert analysis.locals[ret_inner] == 0


def test_same_text_different_nodes_ok():
    src = r"""
    {
      var a = 1;
      print a;
      {
        print a;
      }
    }
    """
    analysis = analyze(src)
    block = analysis.statements[0]
    first = block.statements[1].expression
    second = block.statements[2].statements[0].expression
    assert analysis.locals[first] == 0
    assert analysis.locals[second] == 1


def test_this_and_super_distances_ok():
    src = r"""
    class A { m() { return 1; } }
    class B < A {
      m() { return super.m() + this.n; }
    }
    """
    analysis = analyze(src)
    assert analysis.diagnostics.errors == []
    method = analysis.statements[1].methods[0]
    binary = method.body[0].value
    super_expr = binary.left.callee
    this_expr = binary.right.object
    assert analysis.locals[super_expr] == 2
    assert analysis.locals[this_expr] == 1


def test_resolver_is_idempotent():
    src = r"""
    fun make() {
      var n = 0;
      fun inc() { n = n + 1; return n; }
      return inc;
    }
    { var x = make(); print x(); }
    """
    analysis = analyze(src)
    again = Resolver(Diagnostics()).resolve(analysis.statements)
    assert again == analysis.locals
    assert len(again) > 0


def test_own_initializer_err():
    src = r"""
    {
      var a = "outer";
      {
        var a = a;
      }
    }
    """
    errs = errors_of(src)
    assert errs == ["[line 5] Error at 'a': Can't read local variable in its own initializer."]


def test_own_initializer_never_runs():
    out, result = run_source('print "antes"; { var a = a; }')
    assert result.status == "static_error"
    assert result.exit_code == 65
    assert out == ""


def test_global_self_reference_is_not_static_err():
    assert errors_of("var a = a;") == []


def test_duplicate_local_err():
    src = r"""
    fun f() {
      var a = 1;
      var a = 2;
    }
    """
    errs = errors_of(src)
    assert errs == ["[line 4] Error at 'a': Already a variable with this name in this scope."]


def test_duplicate_parameter_err():
    errs = errors_of("fun f(a, a) {}")
    assert any("Already a variable with this name in this scope." in e for e in errs)


def test_global_redeclaration_ok():
    assert errors_of("var a = 1; var a = 2;") == []


def test_return_top_level_err():
    errs = errors_of("return 1;")
    assert errs == ["[line 1] Error at 'return': Can't return from top-level code."]


def test_return_value_from_initializer_err():
    src = r"""
    class A {
      init() { return 1; }
    }
    """
    errs = errors_of(src)
    assert any("Can't return a value from an initializer." in e for e in errs)


def test_bare_return_in_initializer_ok():
    assert errors_of("class A { init() { return; } }") == []


def test_return_value_from_function_nested_in_initializer_ok():
    src = r"""
    class A {
      init() {
        fun helper() { return 1; }
        this.x = helper();
      }
    }
    """
    assert errors_of(src) == []


def test_this_outside_class_err():
    errs = errors_of("print this;")
    assert errs == ["[line 1] Error at 'this': Can't use 'this' outside of a class."]


def test_this_in_function_outside_class_err():
    errs = errors_of("fun f() { return this; }")
    assert any("Can't use 'this' outside of a class." in e for e in errs)


def test_this_in_nested_function_inside_method_ok():
    src = r"""
    class A {
      m() {
        fun g() { return this; }
        return g;
      }
    }
    """
    assert errors_of(src) == []


def test_class_inherits_itself_err():
    errs = errors_of("class Oops < Oops {}")
    assert errs == ["[line 1] Error at 'Oops': A class can't inherit from itself."]


def test_super_outside_class_err():
    errs = errors_of("super.m();")
    assert any("Can't use 'super' outside of a class." in e for e in errs)


def test_super_without_superclass_err():
    errs = errors_of("class A { m() { super.m(); } }")
    assert any("Can't use 'super' in a class with no superclass." in e for e in errs)


def test_collects_several_resolution_errors():
    src = r"""
    return;
    print this;
    { var b = b; }
    """
    errs = errors_of(src)
    assert len(errs) == 3


def test_duplicate_local_still_checks_own_initializer_err():
    src = r"""
    {
      var a = 1;
      var a = a;
    }
    """
    errs = errors_of(src)
    assert errs == [
        "[line 4] Error at 'a': Already a variable with this name in this scope.",
        "[line 4] Error at 'a': Can't read local variable in its own initializer.",
    ]
