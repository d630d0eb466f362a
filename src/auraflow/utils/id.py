"""ID generation utilities for AuraFlow.

This module provides UUID v4 based identifiers for messages, workflows and sessions.
"""

import time
import uuid


def generate_uuid() -> str:
    """Generate a UUID v4 as a string.

    Returns:
        UUID v4 string (without dashes)
    """
    return uuid.uuid4().hex


def generate_uuid_with_dashes() -> str:
    """Generate a UUID v4 with dashes.

    Returns:
        UUID v4 string with standard format (xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx)
    """
    return str(uuid.uuid4())


def generate_message_id() -> str:
    """Generate a unique message identifier.

    Returns:
        Message ID in the form "msg_<epoch-ms>_<9 random chars>"
    """
    return f"msg_{int(time.time() * 1000)}_{generate_uuid()[:9]}"


def generate_workflow_id() -> str:
    """Generate a unique workflow execution identifier.

    Returns:
        Workflow ID prefixed with "workflow_"
    """
    return f"workflow_{generate_uuid()}"


def generate_session_id() -> str:
    """Generate a unique session identifier.

    Returns:
        Session ID prefixed with "session_"
    """
    return f"session_{generate_uuid()}"

