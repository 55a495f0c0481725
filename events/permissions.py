def is_event_creator(user, event) -> bool:
    """
    Only the user who created an event may change or delete it.
    """
    if not user or not user.is_authenticated or event is None:
        return False

    return event.created_by_id == user.id
