import logging
import sys
import json
import os
import gzip
import shutil
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from typing import Optional
from rebalancer_config import LoggingConfig
from .context import get_current_context

# LogRecord attributes that are not user supplied extras
_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename', 'module',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'taskName', 'getMessage', 'exc_info', 'exc_text',
    'stack_info', 'message', 'client_id', 'account_id',
}


class CompressingTimedRotatingFileHandler(TimedRotatingFileHandler):
    """TimedRotatingFileHandler that gzips rotated files"""

    def doRollover(self):
        super().doRollover()

        dir_name, base_name = os.path.split(self.baseFilename)
        try:
            for file_name in os.listdir(dir_name):
                if file_name.startswith(base_name) and not file_name.endswith('.gz') and file_name != base_name:
                    full_path = os.path.join(dir_name, file_name)
                    with open(full_path, 'rb') as f_in:
                        with gzip.open(f'{full_path}.gz', 'wb') as f_out:
                            shutil.copyfileobj(f_in, f_out)
                    os.remove(full_path)
        except OSError as e:
            # Log compression errors but don't fail the rollover
            print(f"Error during log compression: {e}", file=sys.stderr)


class StructuredFormatter(logging.Formatter):
    """Text or JSON formatter that includes client_id/account_id when present"""

    def __init__(self, output_format: str = 'text'):
        super().__init__()
        self.output_format = output_format

    def format(self, record):
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if hasattr(record, 'client_id'):
            log_data['client_id'] = record.client_id
        if hasattr(record, 'account_id'):
            log_data['account_id'] = record.account_id

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value.isoformat() if isinstance(value, datetime) else value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if self.output_format == 'json':
            return json.dumps(log_data, default=str)

        base_msg = f"{log_data['timestamp']} - {log_data['logger']} - {log_data['level']} - {log_data['message']}"
        if 'client_id' in log_data:
            base_msg += f" [client_id={log_data['client_id']}]"
        if 'account_id' in log_data:
            base_msg += f" [account_id={log_data['account_id']}]"
        if 'exception' in log_data:
            base_msg += f"\n{log_data['exception']}"
        return base_msg


def configure_root_logger(logging_config: Optional[LoggingConfig] = None,
                          log_file_name: str = 'rebalance-dashboard.log'):
    """Configure the root logger to use structured formatting for all logs"""
    logging_config = logging_config or LoggingConfig()
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, logging_config.level))

    formatter = StructuredFormatter(logging_config.format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if logging_config.log_dir:
        os.makedirs(logging_config.log_dir, exist_ok=True)
        file_handler = CompressingTimedRotatingFileHandler(
            filename=os.path.join(logging_config.log_dir, log_file_name),
            when='midnight',
            interval=1,
            backupCount=365,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def _extract_context_properties():
    """Client/account ids from the current rebalance context, for log extras"""
    context = get_current_context()
    if context is None:
        return {}

    properties = {'client_id': context.client_id}
    if context.account_id is not None:
        properties['account_id'] = context.account_id
    return properties


class AppLogger:
    """Logger that attaches the current client/account context to every record"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log_debug(self, message: str):
        self.logger.debug(message, extra=_extract_context_properties())

    def log_info(self, message: str):
        self.logger.info(message, extra=_extract_context_properties())

    def log_warning(self, message: str):
        self.logger.warning(message, extra=_extract_context_properties())

    def log_error(self, message: str):
        self.logger.error(message, extra=_extract_context_properties())
