# helpdesk/database/base_repository.py
# Provides a simplified base class for ORM repositories.

from typing import TYPE_CHECKING

from helpdesk.utils.logger import logger

if TYPE_CHECKING:
    from helpdesk.database import Database


class BaseRepository:
    """
    Base class for data repositories using SQLAlchemy ORM Sessions.
    Keeps a reference to the Database; individual methods receive the
    session opened by the calling service.
    """

    def __init__(self, database: "Database"):
        """
        Initializes the BaseRepository.

        Args:
            database: The Database that owns the engine and session factory.
        """
        from helpdesk.database import Database
        if not isinstance(database, Database):
             raise TypeError("database must be an instance of helpdesk.database.Database")
        self.database = database
        logger.debug(f"{self.__class__.__name__} initialized.")
