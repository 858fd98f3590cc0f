from flask import Blueprint, current_app, jsonify

from chessrelay.errors import RoomNotFound

main = Blueprint('main', __name__)


def _rooms():
    return current_app.extensions['chessrelay']['rooms']


def _room_dict(room):
    data = room.to_dict()
    data['status'] = room.status
    data['capacity'] = room.capacity
    return data


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the chess relay server!'})


@main.route('/api/rooms', methods=['GET'])
def list_rooms():
    """
    Returns every open room. Read only; rooms change over Socket.IO.
    """
    services = _rooms()
    with services.lifecycle.lock:
        rooms = [_room_dict(room) for room in services.store.all()]
    return jsonify({'rooms': rooms, 'count': len(rooms)}), 200


@main.route('/api/rooms/<string:room_id>', methods=['GET'])
def get_room(room_id):
    room = _rooms().lifecycle.get_room(room_id)
    if room is None:
        return jsonify(RoomNotFound(room_id).to_dict()), 404
    return jsonify(_room_dict(room)), 200
