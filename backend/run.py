import os

from arcade import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # SocketIO server so /ws works in dev; tick and reward workers run as its background tasks
    socketio.run(
        app,
        host=os.environ.get('ARCADE_HOST', '127.0.0.1'),
        port=int(os.environ.get('ARCADE_PORT', '5000')),
        debug=True,
    )
