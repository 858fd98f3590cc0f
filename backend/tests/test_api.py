def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_list_rooms_empty(client):
    res = client.get('/api/rooms')
    assert res.status_code == 200
    assert res.get_json() == {'rooms': [], 'count': 0}


def test_room_state_after_join(client, connect):
    alice, bob = connect('alice'), connect('bob')
    room_id = alice.emit('createRoom', callback=True)
    bob.emit('joinRoom', {'roomId': room_id}, callback=True)

    listing = client.get('/api/rooms').get_json()
    assert listing['count'] == 1
    assert listing['rooms'][0]['roomId'] == room_id

    res = client.get(f'/api/rooms/{room_id}')
    assert res.status_code == 200
    state = res.get_json()
    assert state['status'] == 'active'
    assert state['capacity'] == 2
    assert [p['displayName'] for p in state['players']] == ['alice', 'bob']


def test_unknown_room_is_404(client):
    res = client.get('/api/rooms/does-not-exist')
    assert res.status_code == 404
    assert res.get_json() == {'error': True, 'message': 'room does not exist'}

