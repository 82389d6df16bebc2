from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from tastevote.config import Config
from tastevote.exceptions import ProviderError
from tastevote.services.games import ProtocolAdapter, SessionRegistry
from tastevote.services.yelp import YelpClient

registry = SessionRegistry()
yelp = YelpClient()
adapter = ProtocolAdapter(registry, yelp)
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    registry.init_app(flask_app)
    yelp.init_app(flask_app)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from tastevote.routes import main
    flask_app.register_blueprint(main)

    from tastevote.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    from tastevote.api.search import search
    flask_app.register_blueprint(search, url_prefix='/api')

    from tastevote.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('search')
    @click.option('--term', default=None, help='What to search for, e.g. "tacos".')
    @click.option('--latitude', required=True, type=float)
    @click.option('--longitude', required=True, type=float)
    @click.option('--limit', default=None, type=int)
    def search_command(term, latitude, longitude, limit):
        """Lists the restaurants a new session would start with."""
        try:
            candidates = yelp.search(term, latitude, longitude, limit=limit)
        except ProviderError as exc:
            raise click.ClickException(str(exc))
        if not candidates:
            click.echo('No restaurants found.')
            return
        for idx, candidate in enumerate(candidates, start=1):
            click.echo(f"{idx:2d}. {candidate.name} ({candidate.id})")

    flask_app.cli.add_command(search_command)

    return flask_app
