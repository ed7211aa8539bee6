"""MPD daemon client."""

from __future__ import annotations

import logging
from typing import Any, Optional, cast

from ncmpy.errors import ClientError

logger = logging.getLogger(__name__)

mpd: Any | None = None
_MPD_IMPORT_ERROR: Optional[Exception] = None

Song = dict[str, Any]


def _load_mpd() -> None:
    global mpd
    global _MPD_IMPORT_ERROR
    if mpd is not None or _MPD_IMPORT_ERROR is not None:
        return
    try:
        import mpd as mpd_module  # type: ignore
    except Exception as exc:  # pragma: no cover - depends on environment
        mpd = None
        _MPD_IMPORT_ERROR = exc
    else:
        mpd = cast(Any, mpd_module)
        _MPD_IMPORT_ERROR = None


class MpdClient:
    """Thin wrapper around python-mpd2's MPDClient.

    Every command failure, protocol or socket level, is raised as ClientError.
    """

    def __init__(self, host: str, port: int, *, timeout: float = 10.0) -> None:
        _load_mpd()
        if mpd is None:
            raise RuntimeError(
                "MPD support is unavailable. Install the python-mpd2 package."
            ) from _MPD_IMPORT_ERROR
        self.host = host
        self.port = port
        self._client = cast(Any, mpd).MPDClient()
        self._client.timeout = timeout
        self._connected = False

    def _call(self, command: str, *args: Any) -> Any:
        try:
            return getattr(self._client, command)(*args)
        except (cast(Any, mpd).MPDError, OSError) as exc:
            if isinstance(exc, (cast(Any, mpd).ConnectionError, OSError)):
                self._connected = False
            logger.warning("MPD command %s failed: %s", command, exc)
            raise ClientError(f"{command} failed: {exc}") from exc

    @property
    def connected(self) -> bool:
        """False once a command failed on the socket itself."""
        return self._connected

    def connect(self) -> None:
        """Open the connection to the daemon."""
        self._call("connect", self.host, self.port)
        self._connected = True
        logger.info("Connected to MPD %s at %s:%s", self.version, self.host, self.port)

    def reconnect(self) -> None:
        """Drop whatever is left of the socket and connect again."""
        self._connected = False
        try:
            self._client.disconnect()
        except (cast(Any, mpd).MPDError, OSError):
            logger.debug("Ignoring error while dropping MPD socket", exc_info=True)
        self.connect()

    def close(self) -> None:
        was_connected = self._connected
        self._connected = False
        try:
            if was_connected:
                self._client.close()
            self._client.disconnect()
        except (cast(Any, mpd).MPDError, OSError):
            logger.debug("Ignoring error while closing MPD connection", exc_info=True)

    @property
    def version(self) -> str:
        return str(getattr(self._client, "mpd_version", None) or "unknown")

    def status(self) -> dict[str, str]:
        return dict(self._call("status"))

    def current_song(self) -> Optional[Song]:
        song = self._call("currentsong")
        return dict(song) if song else None

    def queue(self) -> list[Song]:
        return [dict(song) for song in self._call("playlistinfo")]

    def stats(self) -> dict[str, str]:
        return dict(self._call("stats"))

    def url_handlers(self) -> list[str]:
        return list(self._call("urlhandlers"))

    def tag_types(self) -> list[str]:
        return list(self._call("tagtypes"))

    def play(self, position: Optional[int] = None) -> None:
        if position is None:
            self._call("play")
        else:
            self._call("play", position)

    def pause(self, paused: bool) -> None:
        self._call("pause", int(paused))

    def stop(self) -> None:
        self._call("stop")

    def previous(self) -> None:
        self._call("previous")

    def next(self) -> None:
        self._call("next")

    def clear(self) -> None:
        self._call("clear")

    def delete(self, position: int) -> None:
        self._call("delete", position)

    def set_volume(self, volume: int) -> None:
        self._call("setvol", max(0, min(100, volume)))

    def set_random(self, enabled: bool) -> None:
        self._call("random", int(enabled))

    def set_repeat(self, enabled: bool) -> None:
        self._call("repeat", int(enabled))

    def seek_current(self, seconds: float) -> None:
        self._call("seekcur", max(0.0, seconds))
