# logging_utils.py - unified logging for the itinerary planner
import logging
import time
import os
import json
from datetime import datetime
from typing import Optional, Dict

from config import Config

LOGGER_NAME = "ItineraryPlanner"

# Global logger instance
_logger_instance = None

def get_logger():
    """Get the global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = setup_logging()
    return _logger_instance

def setup_logging(log_file: Optional[str] = None,
                 console_level: int = logging.INFO,
                 file_level: int = logging.DEBUG) -> logging.Logger:
    """
    Setup unified logging configuration.
    
    Args:
        log_file: Path to log file (defaults to Config.LOG_FILE, empty disables it)
        console_level: Log level for console output
        file_level: Log level for file output
        
    Returns:
        Configured logger
    """
    global _logger_instance
    
    if log_file is None:
        log_file = Config.LOG_FILE
    
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    
    # Clear existing handlers to avoid duplicates
    if logger.handlers:
        logger.handlers.clear()
    
    console_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    
    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)
    
    if log_file:
        # Create logs directory if it doesn't exist
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)
        
        try:
            file_handler = logging.FileHandler(log_file, encoding='utf-8', mode='a')
        except OSError as e:
            logger.warning(f"File logging disabled ({log_file}): {e}")
        else:
            file_handler.setLevel(file_level)
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)
    
    # Prevent propagation to root logger
    logger.propagate = False
    _logger_instance = logger
    
    return logger

def log_step(step_name: str, message: str, level: str = "info"):
    """
    Log a step in the pipeline.
    
    Args:
        step_name: Name of the step/agent
        message: Message to log
        level: Log level (info, warning, error, debug)
    """
    logger = get_logger()
    
    formatted_message = f"[{step_name.upper()}] {message}"
    
    if level.lower() == "info":
        logger.info(formatted_message)
    elif level.lower() == "warning":
        logger.warning(formatted_message)
    elif level.lower() == "error":
        logger.error(formatted_message)
    elif level.lower() == "debug":
        logger.debug(formatted_message)
    else:
        logger.info(formatted_message)

def log_agent_communication(from_agent: str, to_agent: str,
                           message_type: str, data: Dict,
                           destination: str = None, level: str = "info"):
    """
    Log communication between agents and the LLM.
    
    Args:
        from_agent: Sending agent
        to_agent: Receiving agent
        message_type: Type of message/communication
        data: Data being communicated
        destination: Trip destination (if any)
        level: Log level
    """
    logger = get_logger()
    
    log_entry = {
        "timestamp": datetime.now().strftime("%Y%m%d_%H%M%S"),
        "type": "agent_communication",
        "from": from_agent,
        "to": to_agent,
        "message_type": message_type,
        "destination": destination,
        "data_type": type(data).__name__,
        "data_length": len(data) if isinstance(data, (list, dict)) else 1,
        "data_preview": str(data)[:500] if isinstance(data, dict) else str(data)[:200]
    }
    
    log_message = f"AGENT_COMM: {from_agent} -> {to_agent} | TYPE: {message_type} | DESTINATION: {destination or 'N/A'} | DATA: {json.dumps(log_entry, ensure_ascii=False)}"
    
    if level.lower() == "warning":
        logger.warning(log_message)
    elif level.lower() == "debug":
        logger.debug(log_message)
    else:
        logger.info(log_message)

def log_error(agent_name: str, operation: str, error: Exception,
             context: Optional[Dict] = None):
    """
    Log an error with context.
    
    Args:
        agent_name: Name of the agent where error occurred
        operation: Operation being performed
        error: Exception that occurred
        context: Additional context information
    """
    logger = get_logger()
    
    error_message = f"❌ Error in {agent_name}.{operation}: {str(error)}"
    
    if context:
        context_str = " | ".join(f"{k}={v}" for k, v in context.items())
        error_message += f" | Context: {context_str}"
    
    logger.error(error_message, exc_info=(type(error), error, error.__traceback__))

class Timer:
    """Context manager for timing code blocks."""
    
    def __init__(self, name: str = "Operation"):
        self.name = name
        self.start_time = None
        self.end_time = None
    
    def __enter__(self):
        self.start_time = time.time()
        log_step("TIMER", f"Starting {self.name}", level="debug")
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.time()
        status = "Failed" if exc_type else "Completed"
        log_step("TIMER", f"{status} {self.name} in {self.get_elapsed():.2f} seconds", level="debug")
    
    def get_elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if self.start_time is None:
            return 0.0
        if self.end_time is None:
            return time.time() - self.start_time
        return self.end_time - self.start_time
