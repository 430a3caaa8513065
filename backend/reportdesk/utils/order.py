from reportdesk.extensions import db


def apply_order(items, order_field="order_index"):
    """
    Re-assigns sequential order values (0..N-1) following the given sequence.

    Values are first parked on negatives so a unique (owner, order)
    constraint never sees a duplicate mid-flush.
    """
    items = list(items)
    if all(getattr(item, order_field) == index for index, item in enumerate(items)):
        return items

    for index, item in enumerate(items):
        setattr(item, order_field, -(index + 1))
    db.session.flush()

    for index, item in enumerate(items):
        setattr(item, order_field, index)
    db.session.flush()

    return items


def compact_order(query, order_field="order_index"):
    """
    Re-assigns sequential order values (0..N-1) for a scoped query,
    keeping the current relative order.
    """
    model = query.column_descriptions[0]["entity"]
    items = query.order_by(
        getattr(model, order_field).asc(),
        model.created_at.asc(),
        model.id.asc(),
    ).all()

    return apply_order(items, order_field)
