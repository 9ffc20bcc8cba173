"""Queue command implementations invoked through key bindings."""

from __future__ import annotations

from yank_queue.session import SeedMode

from .models import CommandContext, CommandRequest, CommandResult


def start_queue(context: CommandContext, request: CommandRequest) -> CommandResult:
    count = request.prefix if request.prefix is not None else context.settings.default_seed
    context.session.on_activate(SeedMode.last_n(count))
    pending = context.session.pending_count()
    message = f"Queue started with {pending} entries" if pending else "Queue started"
    return CommandResult(consumed=True, status="started", message=message)


def paste_next(context: CommandContext, request: CommandRequest) -> CommandResult:
    outcome = context.session.on_retrieve_next(
        extend_selection=request.extend_selection
    )
    if outcome.delivered:
        return CommandResult(consumed=True, status="delivered", outcomes=(outcome,))
    return CommandResult(
        consumed=True,
        status="empty",
        message=context.settings.empty_message,
        outcomes=(outcome,),
    )


def paste_next_extend(context: CommandContext, request: CommandRequest) -> CommandResult:
    return paste_next(
        context, CommandRequest(prefix=request.prefix, extend_selection=True)
    )


def stop_queue(context: CommandContext, request: CommandRequest) -> CommandResult:
    del request
    was_active = context.session.active
    context.session.on_deactivate()
    if not was_active:
        return CommandResult(consumed=False, status="noop")
    return CommandResult(consumed=True, status="stopped", message="Queue stopped")


def toggle_queue(context: CommandContext, request: CommandRequest) -> CommandResult:
    if context.session.active:
        return stop_queue(context, request)
    return start_queue(context, request)


__all__ = [
    "start_queue",
    "paste_next",
    "paste_next_extend",
    "stop_queue",
    "toggle_queue",
]
