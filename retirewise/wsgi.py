#setup: pip install -e ".[test]"
#setup: flask --app retirewise.wsgi run --port 5000 --debug

from retirewise.app import create_app

app = create_app()


def main() -> None:
    app.run(port=5000, debug=True)


if __name__ == "__main__":
    main()
