import logging

import uvicorn

from eliteshop.config import settings
from eliteshop.db.sqlite import init_db
from eliteshop.web.main import create_app


def main() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    init_db(settings.db_path)

    app = create_app(settings)
    logging.getLogger(__name__).info("%s running at http://localhost:%d", settings.shop_name, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
