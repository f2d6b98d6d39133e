from helpers import output_lines, run_source


def test_class_init_round_trip_ok():
    src = r"""
    class Point {
      init(x) { this.x = x; }
    }
    var p = Point(7);
    print p.x;
    """
    assert output_lines(src) == ["7"]


def test_class_call_arity_err():
    src = r"""
    class Point {
      init(x) { this.x = x; }
    }
    Point();
    """
    _, result = run_source(src)
    assert result.status == "runtime_error"
    assert result.messages == ["Expected 1 arguments but got 0.\n[line 5]"]


def test_class_without_init_takes_no_arguments_err():
    _, result = run_source("class A {} A(1);")
    assert result.messages == ["Expected 0 arguments but got 1.\n[line 1]"]


def test_print_class_and_instance_ok():
    assert output_lines("class Bagel {} print Bagel; print Bagel();") == ["Bagel", "Bagel instance"]


def test_fields_are_created_on_set_ok():
    src = r"""
    class Box {}
    var b = Box();
    b.content = "gato";
    print b.content;
    b.content = "perro";
    print b.content;
    """
    assert output_lines(src) == ["gato", "perro"]


def test_undefined_property_err_line():
    src = r"""
    class A {}
    var a = A();
    print a.nope;
    """
    out, result = run_source(src)
    assert out == ""
    assert result.messages == ["Undefined property 'nope'.\n[line 4]"]


def test_only_instances_have_properties_err():
    _, result = run_source("var x = 1; print x.y;")
    assert result.messages == ["Only instances have properties.\n[line 1]"]


def test_only_instances_have_fields_err():
    _, result = run_source('var x = "s"; x.y = 1;')
    assert result.messages == ["Only instances have fields.\n[line 1]"]


def test_methods_and_this_ok():
    src = r"""
    class Counter {
      init() { this.n = 0; }
      inc() {
        this.n = this.n + 1;
        return this;
      }
    }
    var c = Counter();
    print c.inc().inc().n;
    """
    assert output_lines(src) == ["2"]


def test_bound_method_keeps_instance_ok():
    src = r"""
    class Person {
      init(name) { this.name = name; }
      sayName() { print this.name; }
    }
    var jane = Person("Jane");
    var bill = Person("Bill");
    bill.sayName = jane.sayName;
    bill.sayName();
    """
    assert output_lines(src) == ["Jane"]


def test_fields_shadow_methods_ok():
    src = r"""
    class A {
      m() { return "metodo"; }
    }
    var a = A();
    fun f() { return "campo"; }
    a.m = f;
    print a.m();
    """
    assert output_lines(src) == ["campo"]


def test_closure_inside_method_sees_this_ok():
    src = r"""
    class Thing {
      getCallback() {
        fun localFunction() { print this; }
        return localFunction;
      }
    }
    var callback = Thing().getCallback();
    callback();
    """
    assert output_lines(src) == ["Thing instance"]


def test_calling_init_directly_returns_instance_ok():
    src = r"""
    class Foo {
      init() { this.k = 1; }
    }
    var foo = Foo();
    print foo.init();
    """
    assert output_lines(src) == ["Foo instance"]


def test_early_return_in_init_returns_instance_ok():
    src = r"""
    class Foo {
      init(flag) {
        this.a = 1;
        if (flag) return;
        this.a = 2;
      }
    }
    print Foo(true).a;
    print Foo(false).a;
    """
    assert output_lines(src) == ["1", "2"]


def test_inheritance_and_super_ok():
    src = r"""
    class A {
      method() { print "A method"; }
    }
    class B < A {
      method() { print "B method"; }
      test() { super.method(); }
    }
    class C < B {}
    C().test();
    C().method();
    """
    assert output_lines(src) == ["A method", "B method"]


def test_inherited_initializer_ok():
    src = r"""
    class Base {
      init(v) { this.v = v; }
    }
    class Derived < Base {
      show() { print this.v; }
    }
    Derived(5).show();
    """
    assert output_lines(src) == ["5"]


def test_super_init_chain_ok():
    src = r"""
    class Animal {
      init(name) { this.name = name; }
      speak() { return this.name + " hace ruido"; }
    }
    class Dog < Animal {
      init(name) {
        super.init(name);
        this.kind = "perro";
      }
      speak() { return super.speak() + " (" + this.kind + ")"; }
    }
    print Dog("Toby").speak();
    """
    assert output_lines(src) == ["Toby hace ruido (perro)"]


def test_superclass_must_be_class_err():
    _, result = run_source('var NotAClass = "no"; class A < NotAClass {}')
    assert result.messages == ["Superclass must be a class.\n[line 1]"]


def test_super_undefined_method_err():
    src = r"""
    class A {}
    class B < A {
      m() { return super.nada(); }
    }
    B().m();
    """
    _, result = run_source(src)
    assert result.messages == ["Undefined property 'nada'.\n[line 4]"]


def test_instances_do_not_share_fields_ok():
    src = r"""
    class Box { init(v) { this.v = v; } }
    var a = Box(1);
    var b = Box(2);
    print a.v;
    print b.v;
    """
    assert output_lines(src) == ["1", "2"]


def test_local_class_ok():
    src = r"""
    {
      class Local {
        hi() { return "hola"; }
      }
      print Local().hi();
    }
    """
    assert output_lines(src) == ["hola"]
