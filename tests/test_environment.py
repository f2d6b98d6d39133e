import pytest

from lox.front.tokens import Token, TokenType
from lox.runtime.environment import Environment
from lox.runtime.errors import LoxRuntimeError


def ident(name, line=1):
    return Token(TokenType.IDENTIFIER, name, None, line)


def test_define_get_and_redefine():
    env = Environment()
    env.define("a", 1.0)
    env.define("a", 2.0)
    assert env.get(ident("a")) == 2.0


def test_get_walks_enclosing_chain():
    globals = Environment()
    globals.define("a", "global")
    inner = Environment(Environment(globals))
    assert inner.get(ident("a")) == "global"


def test_get_undefined_raises_with_token():
    env = Environment(Environment())
    with pytest.raises(LoxRuntimeError) as info:
        env.get(ident("nope", line=7))
    assert str(info.value) == "Undefined variable 'nope'."
    assert info.value.token.line == 7


def test_assign_updates_nearest_binding():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.assign(ident("a"), 5.0)
    assert outer.get(ident("a")) == 5.0
    assert "a" not in inner.values


def test_assign_never_creates_binding():
    env = Environment()
    with pytest.raises(LoxRuntimeError):
        env.assign(ident("a"), 1.0)
    assert env.values == {}


def test_get_at_and_assign_at_skip_shadowing():
    outer = Environment()
    outer.define("a", "outer")
    inner = Environment(outer)
    inner.define("a", "inner")
    assert inner.get_at(0, "a") == "inner"
    assert inner.get_at(1, "a") == "outer"
    inner.assign_at(1, ident("a"), "changed")
    assert outer.values["a"] == "changed"
    assert inner.values["a"] == "inner"


def test_ancestor_out_of_range_is_programming_error():
    env = Environment()
    with pytest.raises(LookupError):
        env.ancestor(1)


def test_shared_environment_mutation_visible_to_all_children():
    shared = Environment()
    shared.define("n", 0.0)
    a = Environment(shared)
    b = Environment(shared)
    a.assign(ident("n"), 3.0)
    assert b.get(ident("n")) == 3.0
