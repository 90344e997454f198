import os

import uvicorn


def main():
    host = os.environ.get("HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", "8000"))

    uvicorn.run("app.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
