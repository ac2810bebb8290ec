def _events(sio_client, name):
    return [pkt for pkt in sio_client.get_received('/ws') if pkt['name'] == name]


def test_socket_connect_and_ping(sio_client):
    # Ensure we are connected to /ws
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')
    sio_client.get_received('/ws')

    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    pongs = _events(sio_client, 'pong')
    assert pongs and pongs[0]['args'][0] == {'n': 1}


def test_join_session_requires_known_id(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_session', {}, namespace='/ws')
    assert _events(sio_client, 'error')
    sio_client.emit('join_session', {'session_id': 'missing'}, namespace='/ws')
    errors = _events(sio_client, 'error')
    assert errors[0]['args'][0] == {'message': 'Session not found'}


def test_session_room_receives_state_updates(client, sio_client):
    sid = client.post('/api/games/tictactoe/sessions', json={'options': {'difficulty': 'hard'}}).get_json()['id']
    sio_client.get_received('/ws')

    sio_client.emit('join_session', {'session_id': sid}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'joined' and pkt['args'][0] == {'room': f'session:{sid}'} for pkt in received)
    initial = [pkt for pkt in received if pkt['name'] == 'state_update']
    assert initial[0]['args'][0]['state']['phase'] == 'MENU'

    client.post(f'/api/games/sessions/{sid}/events', json={'type': 'start'})
    client.post(f'/api/games/sessions/{sid}/events', json={'type': 'move', 'cell': 4})
    updates = _events(sio_client, 'state_update')
    assert len(updates) == 2
    last = updates[-1]['args'][0]
    assert last['session_id'] == sid
    assert last['state']['board'][4] == 'X'
    assert [e['mark'] for e in last['effects']] == ['X', 'O']

    sio_client.emit('leave_session', {'session_id': sid}, namespace='/ws')
    sio_client.get_received('/ws')
    client.post(f'/api/games/sessions/{sid}/events', json={'type': 'move', 'cell': 0 if last['state']['board'][0] is None else 8})
    assert _events(sio_client, 'state_update') == []


def test_wallet_room_receives_reward_updates(client, sio_client):
    address = 'ALGOSOCKETWALLET01'
    sio_client.get_received('/ws')
    sio_client.emit('join_wallet', {'address': address}, namespace='/ws')
    assert _events(sio_client, 'joined')[0]['args'][0] == {'room': f'wallet:{address}'}

    client.post('/api/leaderboard/submit', json={'address': address, 'gameType': 'snake', 'score': 520})
    updates = [pkt['args'][0] for pkt in _events(sio_client, 'reward_update')]
    assert sorted(u['kind'] for u in updates) == ['badge', 'token']
    assert all(u['status'] == 'confirmed' and u['address'] == address for u in updates)


def test_scheduler_ticks_real_time_session(flask_app, client):
    flask_app.config['ENABLE_SCHEDULER_IN_TESTS'] = True
    sid = client.post('/api/games/snake/sessions', json={}).get_json()['id']
    # Inline in tests: ticks run until the snake hits the wall
    res = client.post(f'/api/games/sessions/{sid}/events', json={'type': 'start'})
    assert res.status_code == 200
    state = client.get(f'/api/games/sessions/{sid}').get_json()['state']
    assert state['phase'] == 'GAME_OVER'
    assert 'ticking' in flask_app.extensions['arcade']
    assert sid not in flask_app.extensions['arcade']['ticking']
