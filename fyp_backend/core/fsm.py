"""
Helpers around django-fsm transitions.
"""

from django_fsm import TransitionNotAllowed

from fyp_backend.core.exceptions import InvalidTransitionError


def run_transition(instance, name: str, *args, save: bool = True, **kwargs):
    """
    Call the transition method `name` on `instance`, then save it.

    TransitionNotAllowed (wrong source state or failed condition) becomes
    InvalidTransitionError so the API answers 409. Pass save=False when the
    caller has more to write before the row may be saved.
    """
    method = getattr(instance, name)
    current = instance.status
    try:
        result = method(*args, **kwargs)
    except TransitionNotAllowed as exc:
        raise InvalidTransitionError(
            f"Cannot {name.replace('_', ' ')} a {instance._meta.verbose_name} in status '{current}'.",
            details={"status": str(current), "transition": name},
        ) from exc
    if save:
        instance.save()
    return result
