#!/usr/bin/env python3
from flask import Flask, request
from werkzeug.serving import make_server, select_address_family
from dataclasses import dataclass
import logging
import os
import socket
import sys

from storage import StorageError, new_writer

TEXT = {"Content-Type": "text/plain; charset=utf-8"}


@dataclass(frozen=True)
class Config:
    data_path: str = "/data/output.txt"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        return cls(
            data_path=env.get("DATA_PATH", cls.data_path),
            host=env.get("HOST", cls.host),
            port=int(env.get("PORT", cls.port)),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
        )

    @property
    def level(self):
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.INFO


def create_app(config=None):
    config = config or Config()
    app = Flask(__name__)
    writer = new_writer(config.data_path)

    @app.route("/health")
    def health():
        return "OK\n", 200, TEXT

    @app.route("/write")
    def write():
        msg = request.args.get("msg", "")
        if not msg:
            app.logger.info("Rejected write: missing msg parameter")
            return "Missing msg parameter\n", 400, TEXT
        try:
            writer.write(msg)
        except StorageError as e:
            app.logger.error("Failed to write to file: %s", e)
            return "Failed to write to storage\n", 500, TEXT

        app.logger.info("Successfully wrote message: %s", msg)
        return f"Written: {msg}\n", 200, TEXT

    return app


def main():
    config = Config.from_env()
    logging.basicConfig(
        level=config.level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )
    log = logging.getLogger("storage-writer")
    app = create_app(config)

    log.info("Server starting on :%d...", config.port)
    log.info("Data path: %s", config.data_path)
    log.info("Endpoints:")
    log.info("  GET /write?msg=<message> - Write message to persistent storage")
    log.info("  GET /health - Health check")

    # bind here so a taken port is reported through our logger
    try:
        family = select_address_family(config.host, config.port)
        sock = socket.create_server((config.host, config.port), family=family)
    except OSError as e:
        log.critical("Could not start server on %s:%d: %s", config.host, config.port, e)
        sys.exit(1)

    with sock:
        server = make_server(config.host, config.port, app, threaded=True, fd=sock.fileno())
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            log.info("Server stopped")
        finally:
            server.server_close()


if __name__ == "__main__":
    main()
