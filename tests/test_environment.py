from quill.environment import Environment
from quill.values import NumberVal, StringVal


def test_declare_rejects_same_scope_redeclaration():
    env = Environment()
    assert env.declare('x', NumberVal(1))
    assert not env.declare('x', NumberVal(2))
    assert env.lookup('x') == NumberVal(1)


def test_child_may_shadow_parent():
    parent = Environment()
    parent.declare('x', NumberVal(1))
    child = Environment(parent)
    assert child.declare('x', StringVal('inner'))
    assert child.lookup('x') == StringVal('inner')
    assert parent.lookup('x') == NumberVal(1)


def test_assign_updates_nearest_binding():
    root = Environment()
    root.declare('x', NumberVal(1))
    middle = root.child()
    leaf = middle.child()
    assert leaf.assign('x', NumberVal(5))
    assert root.lookup('x') == NumberVal(5)
    assert not leaf.has('x')


def test_assign_to_unbound_name_fails():
    env = Environment().child()
    assert not env.assign('missing', NumberVal(1))
    assert env.lookup('missing') is None


def test_lookup_walks_parents():
    root = Environment()
    root.declare('a', NumberVal(1))
    leaf = root.child().child()
    assert leaf.lookup('a') == NumberVal(1)
    assert leaf.resolve('a') is root
    assert leaf.resolve('b') is None
