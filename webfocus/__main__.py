"""Run an empty webfocus host configured from WEBFOCUS_* environment variables."""

from webfocus.app import WebfocusApp


def main() -> None:
    WebfocusApp().start()


if __name__ == "__main__":
    main()
