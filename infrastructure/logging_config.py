"""
Logging configuration for RoboRooney
Rotating log files for the bot, its errors, and the availability engine
"""

import logging
import logging.handlers
import os
from datetime import datetime

# Loggers of the availability engine; they also write to availability.log
AVAILABILITY_LOGGERS = (
    'PitchSlotTracker',
    'AvailabilityReconciler',
    'NotificationTicker',
)

BOT_LOGGERS = (
    'RoboRooney',
    'LifecycleManager',
    'MLPClient',
    'WebhookNotifier',
    'ErrorHandler',
    'Main',
)


def setup_logging(production_mode: bool = False, log_dir: str = 'logs') -> str:
    """
    Set up logging with console and rotating file handlers.

    Args:
        production_mode: Only warnings and errors reach the console and main log
        log_dir: Directory receiving the log files (created if missing)

    Returns:
        The absolute path of the log directory
    """
    log_dir = os.path.abspath(log_dir)
    os.makedirs(log_dir, exist_ok=True)

    main_log_file = os.path.join(log_dir, 'bot.log')
    debug_log_file = os.path.join(log_dir, 'bot_debug.log')
    error_log_file = os.path.join(log_dir, 'bot_errors.log')
    availability_log_file = os.path.join(log_dir, 'availability.log')

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING if production_mode else logging.DEBUG)
    root_logger.handlers = []

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d in %(funcName)s()] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING if production_mode else logging.INFO)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    main_file_handler = logging.handlers.RotatingFileHandler(
        main_log_file,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    main_file_handler.setLevel(logging.WARNING if production_mode else logging.INFO)
    main_file_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(main_file_handler)

    if not production_mode:
        debug_file_handler = logging.handlers.RotatingFileHandler(
            debug_log_file,
            maxBytes=50*1024*1024,  # 50MB
            backupCount=3,
            encoding='utf-8'
        )
        debug_file_handler.setLevel(logging.DEBUG)
        debug_file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(debug_file_handler)

    error_file_handler = logging.handlers.RotatingFileHandler(
        error_log_file,
        maxBytes=5*1024*1024,  # 5MB
        backupCount=5,
        encoding='utf-8'
    )
    error_file_handler.setLevel(logging.ERROR)
    error_file_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(error_file_handler)

    availability_handler = logging.handlers.RotatingFileHandler(
        availability_log_file,
        maxBytes=20*1024*1024,  # 20MB
        backupCount=5,
        encoding='utf-8'
    )
    availability_handler.setLevel(logging.INFO if production_mode else logging.DEBUG)
    availability_handler.setFormatter(detailed_formatter)

    for name in AVAILABILITY_LOGGERS:
        logger = logging.getLogger(name)
        # Guard against duplicate handlers when setup runs twice
        logger.handlers = [h for h in logger.handlers if not isinstance(h, logging.handlers.RotatingFileHandler)]
        logger.addHandler(availability_handler)
        logger.setLevel(logging.INFO if production_mode else logging.DEBUG)

    for name in BOT_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if production_mode else logging.DEBUG)

    # Reduce noise from external libraries
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('telegram').setLevel(logging.INFO)

    root_logger.info("=" * 80)
    root_logger.info("RoboRooney Logging Initialized - %s", datetime.now())
    root_logger.info("Production Mode: %s", 'ON' if production_mode else 'OFF')
    root_logger.info("Main log: %s", main_log_file)
    if not production_mode:
        root_logger.info("Debug log: %s", debug_log_file)
    root_logger.info("Error log: %s", error_log_file)
    root_logger.info("Availability log: %s", availability_log_file)
    root_logger.info("=" * 80)
    return log_dir


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name

    Args:
        name: Logger name

    Returns:
        logging.Logger instance
    """
    return logging.getLogger(name)
