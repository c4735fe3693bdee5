#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -U pip -e ".[test]"
#setup: flask --app backend.wsgi run --port 5001 --debug

from backend.app import create_app
from backend.config import get_settings

app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    app.run(port=settings.PORT, debug=settings.DEBUG)
