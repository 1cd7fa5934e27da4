from showfinder import config
from showfinder.utils.events import fingerprint


def dedupe(events, context, basis=None):
    """
    Drop events whose fingerprint was already seen in this run.
    Single pass, keeps input order; the first occurrence wins, so
    higher-priority sources must come first.
    """
    basis = basis or config.FINGERPRINT_BASIS
    kept = []
    for event in events:
        key = fingerprint(event, basis)
        if key in context.seen_fingerprints:
            context.drop("duplicate")
            continue
        context.seen_fingerprints.add(key)
        kept.append(event)
    return kept
