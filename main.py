# main.py
from __future__ import annotations
import structlog
from app.logging_config import configure_logging
from app.demo.counter import CounterApp


def main() -> None:
    configure_logging(debug=False, json=False)
    log = structlog.get_logger()

    log.info("app.start", msg="Launching counter demo")
    app = CounterApp()
    app.run()
    app.throwIncrement()
    app.throwIncrement(5)
    app.throwDecrement(2)
    app.throwReset()
    log.info("app.stop", msg="Exited cleanly", state=app.get_state())


if __name__ == "__main__":
    main()
