import uvicorn
from dotenv import load_dotenv

load_dotenv()

from server import server  # noqa: E402

server_app = server.handler


def main():
    """Serve the mailbox on port 8080."""
    uvicorn.run(server_app, host="0.0.0.0", port=8080)


if __name__ == "__main__":
    main()
