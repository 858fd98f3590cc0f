from chessrelay.connections import Connection, ConnectionRegistry, handle_of


def test_register_and_unregister():
    registry = ConnectionRegistry()
    conn = registry.register('sid-1')
    assert registry.get('sid-1') is conn
    assert 'sid-1' in registry
    assert registry.unregister('sid-1') is conn
    assert registry.get('sid-1') is None
    assert registry.unregister('sid-1') is None


def test_register_twice_keeps_connection():
    registry = ConnectionRegistry()
    conn = registry.register('sid-1')
    conn.display_name = 'alice'
    assert registry.register('sid-1') is conn
    assert len(registry) == 1


def test_display_name_last_write_wins():
    registry = ConnectionRegistry()
    registry.register('sid-1')
    registry.set_display_name('sid-1', 'alice')
    registry.set_display_name('sid-1', 'bob')
    registry.set_display_name('sid-1', 'bob')
    assert registry.get('sid-1').display_name == 'bob'


def test_display_name_not_validated():
    registry = ConnectionRegistry()
    assert registry.set_display_name('sid-2', '').display_name == ''
    assert registry.set_display_name('sid-2', None).display_name == ''
    assert registry.set_display_name('sid-2', 42).display_name == '42'


def test_handle_is_stable_identity():
    conn = Connection('sid-9', 'carol')
    conn.display_name = 'renamed'
    assert handle_of(conn) == 'sid-9'
    assert ConnectionRegistry().handle_of(conn) == 'sid-9'
