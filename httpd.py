import argparse
import logging

from tiny.config import Config
from tiny.server import IterativeHTTPServer as Server


def main(argv=None):
    parser = argparse.ArgumentParser(description="Tiny: an iterative HTTP/1.0 server for static and CGI content")
    parser.add_argument("port_arg", nargs="?", type=int, metavar="PORT", help="port to listen on (same as --port)")
    parser.add_argument("--host", "-H", type=str, default="0.0.0.0", help="host to listen on")
    parser.add_argument("--port", "-p", type=int, default=8080, help="port to listen on")
    parser.add_argument("--root", "-r", type=str, default=".", help="content root prefixed to every request target")
    parser.add_argument("--cgi-marker", type=str, default="cgi-bin", help="targets containing this run as programs")
    parser.add_argument("--index", type=str, default="home.html", help="document served for targets ending in '/'")
    parser.add_argument("--debug", "-D", action="store_true", help="enable debug logging")

    args = parser.parse_args(argv)
    port = args.port_arg if args.port_arg is not None else args.port
    config = Config(
        host=args.host,
        port=port,
        root=args.root,
        dynamic_marker=args.cgi_marker,
        default_document=args.index,
        debug=args.debug,
    )
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    server = Server(config)
    try:
        server.run()
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutting down")


if __name__ == "__main__":
    main()
