"""Helper module for adding up the nonlinear responses of a field."""


def accumulate_responses(Pt, Et, responses, idcs=None):
    """
    Add the contribution of every response induced by `Et` into `Pt`.

    Parameters
    ----------
    Pt : (N, ...) ndarray
        Polarisation buffer (output). It must be zeroed by the caller.
    Et : (N, ...) ndarray
        Time-domain field.
    responses : sequence of callables
        Each one is called as `response(out, E)` and adds into `out`.
    idcs : iterable of tuple, optional
        Trailing indices. When given, the whole list of responses is
        applied to each `Pt[:, *idx]` / `Et[:, *idx]` column on its own.

    """
    if idcs is None:
        for resp in responses:
            resp(Pt, Et)
        return

    for idx in idcs:
        key = (slice(None),) + tuple(idx)
        accumulate_responses(Pt[key], Et[key], responses)
