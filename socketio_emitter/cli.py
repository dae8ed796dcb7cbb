import json
from typing import BinaryIO

import click

from socketio_emitter.enums import Flag


@click.group()
def main() -> None:
    """socketio-emitter - publish Socket.IO events through Redis."""


_target_options = [
    click.option("--to", "-t", "rooms", multiple=True, help="Target room (repeatable)."),
    click.option("--of", "namespace", default=None, help="Namespace (default: from settings or /)."),
    click.option("--prefix", default=None, help="Channel prefix (default: from settings or socket.io)."),
]


def _with_target_options(func):
    for option in reversed(_target_options):
        func = option(func)
    return func


@main.command()
@click.argument("args", nargs=-1, required=True)
@_with_target_options
@click.option("--json", "json_", is_flag=True, help="Set the json flag.")
@click.option("--volatile", is_flag=True, help="Set the volatile flag.")
@click.option("--broadcast", is_flag=True, help="Set the broadcast flag.")
@click.option("--redis-url", default=None, help="Redis URL (default: from SOCKETIO_EMITTER_REDIS_URL).")
def emit(
    args: tuple[str, ...],
    rooms: tuple[str, ...],
    namespace: str | None,
    prefix: str | None,
    json_: bool,
    volatile: bool,
    broadcast: bool,
    redis_url: str | None,
) -> None:
    """Publish one event whose arguments are ARGS (event name first)."""
    from socketio_emitter.broker import connect
    from socketio_emitter.emitter import Emitter
    from socketio_emitter.errors import EmitterError
    from socketio_emitter.log import setup_logging
    from socketio_emitter.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level, quiet=settings.quiet_loggers)

    try:
        publisher = connect(
            redis_url or settings.redis_url,
            socket_connect_timeout=settings.socket_connect_timeout,
            socket_timeout=settings.socket_timeout,
        )
        emitter = Emitter(publisher, prefix=prefix or settings.prefix, namespace=namespace or settings.namespace)
        for room in rooms:
            emitter.to(room)
        # Flags replace each other; later ones in this order win.
        for flag, enabled in ((Flag.JSON, json_), (Flag.VOLATILE, volatile), (Flag.BROADCAST, broadcast)):
            if enabled:
                getattr(emitter, flag.value)()
        emitter.emit(*args)
    except EmitterError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(emitter.last_channel)


@main.command()
@_with_target_options
def channel(rooms: tuple[str, ...], namespace: str | None, prefix: str | None) -> None:
    """Print the channel an emission would be published on."""
    from socketio_emitter.channel import address
    from socketio_emitter.settings import get_settings

    settings = get_settings()
    click.echo(address(prefix or settings.prefix, namespace or settings.namespace, rooms))


@main.command()
@click.argument("source", type=click.File("rb"), default="-")
def decode(source: BinaryIO) -> None:
    """Decode a raw envelope from SOURCE (file or - for stdin) and print it as JSON."""
    from socketio_emitter.codec import decode as decode_envelope
    from socketio_emitter.errors import EncodingError

    try:
        envelope = decode_envelope(source.read())
    except EncodingError as exc:
        raise click.ClickException(str(exc)) from exc

    doc = {
        "uid": envelope.sender_id,
        "packet": envelope.packet.model_dump(),
        "options": envelope.options.model_dump(),
    }
    click.echo(json.dumps(doc, indent=2))


if __name__ == "__main__":
    main()
