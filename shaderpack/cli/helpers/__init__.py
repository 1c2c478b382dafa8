from .output import (
    print_candidates,
    print_error_message,
    print_profiles_table,
    print_result,
    print_success_message,
)


__all__ = [
    "print_candidates",
    "print_error_message",
    "print_profiles_table",
    "print_result",
    "print_success_message",
]
