from flask_socketio import join_room, emit, disconnect
from flask import current_app, request
from tastevote import adapter, registry
from tastevote.exceptions import ProviderError
from tastevote.models import SessionStatus
from tastevote.services.games import ANY_STATUS, Admitted
from typing import Dict, Any

NAMESPACE = '/ws'

_sid_to_ctx: Dict[str, Dict[str, Any]] = {}


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _room(join_code: str) -> str:
    return f"session:{join_code}"


def _ctx() -> Dict[str, Any]:
    ctx = _sid_to_ctx.get(_get_sid())
    if ctx is None:
        ctx = _sid_to_ctx[_get_sid()] = {'join_code': request.args.get('joinCode'), 'joined': False}
    return ctx


def _broadcast(join_code: str, events) -> None:
    for event in events:
        emit(event.name, event.payload, to=_room(join_code), namespace=NAMESPACE)


def _admit(required_status, action) -> None:
    """Run `action(session)` if this connection's session is in `required_status`.

    An unknown join code or a session in the wrong stage is terminal for the
    connection: it gets an error event and is disconnected.
    """
    join_code = _ctx().get('join_code')
    events = None
    with registry.lock:
        admission = adapter.admit(join_code, required_status)
        if isinstance(admission, Admitted):
            try:
                events = action(admission.session)
            except ProviderError as exc:
                current_app.logger.warning(f"[provider] session={join_code} {exc}")
                emit('providerError', {'message': str(exc)})
                return
    if events is None:
        current_app.logger.info(f"[reject] sid={_get_sid()} session={join_code} reason={admission.reason}")
        emit('error', {'message': admission.reason})
        disconnect()
        return
    _broadcast(join_code, events)


def handle_connect(auth=None):
    _ctx()
    emit('connected', {'message': 'Connected to /ws'})


def handle_disconnect(reason=None):
    ctx = _sid_to_ctx.pop(_get_sid(), None)
    if not ctx or not ctx.get('joined'):
        return
    join_code = ctx['join_code']
    with registry.lock:
        admission = adapter.admit(join_code, ANY_STATUS)
        if not isinstance(admission, Admitted):
            return
        events = adapter.leave(admission.session)
    current_app.logger.info(f"[leave] session={join_code} players={admission.session.num_players}")
    _broadcast(join_code, events)


def handle_join_game(data=None):
    def _join(session):
        ctx = _ctx()
        if ctx['joined']:
            return []
        ctx['joined'] = True
        join_room(_room(session.join_code))
        return adapter.join(session)

    _admit(SessionStatus.LOBBY, _join)


def handle_start_game(data=None):
    def _start(session):
        events = adapter.start(session)
        current_app.logger.info(f"[start] session={session.join_code} players={session.num_players}")
        return events

    _admit(SessionStatus.LOBBY, _start)


def handle_submit_vote(data=None):
    # Only a JSON true counts as a yes; "false", 1 and the like are no votes
    ok = data.get('ok') if isinstance(data, dict) else data
    affirmative = ok is True

    def _vote(session):
        events = adapter.vote(session, affirmative)
        for event in events:
            current_app.logger.info(f"[{event.name}] session={session.join_code} round={session.tally.round}")
        return events

    _admit(SessionStatus.PLAYING, _vote)


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    from tastevote import socketio
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('joinGame', handle_join_game, namespace=NAMESPACE)
    socketio.on_event('startGame', handle_start_game, namespace=NAMESPACE)
    socketio.on_event('submitVote', handle_submit_vote, namespace=NAMESPACE)
