import argparse
import sys

from tiny.client import EchoClient


def main(argv=None):
    parser = argparse.ArgumentParser(description="Send stdin lines to an echo server and print the replies")
    parser.add_argument("host", type=str, help="server host")
    parser.add_argument("port", type=int, help="server port")
    args = parser.parse_args(argv)

    client = EchoClient(args.host, args.port)
    for reply in client.echo(sys.stdin.buffer):
        sys.stdout.buffer.write(reply)
        sys.stdout.buffer.flush()


if __name__ == "__main__":
    main()
