HOLES = 18
TEE_COLORS = ("blue", "white", "red")
VALID_PARS = (3, 4, 5)


class ScorecardError(ValueError):
    """Input that the scoring engine refuses to compute with."""


class CourseDataError(ScorecardError):
    pass


def validate_stroke_indexes(indexes, tee_color: str):
    """
    indexes: stroke index (hole handicap) per hole for one tee color.
    Must be exactly the values 1..18, each used once.
    """
    indexes = list(indexes)
    if len(indexes) != HOLES:
        raise CourseDataError(
            f"stroke indexes for {tee_color} tees must have {HOLES} values, got {len(indexes)}"
        )

    holes_by_index = {}
    for hole, index in enumerate(indexes, start=1):
        holes_by_index.setdefault(index, []).append(hole)

    if sorted(holes_by_index) == list(range(1, HOLES + 1)):
        return indexes

    duplicates = [
        f"{index} (holes {', '.join(str(h) for h in holes)})"
        for index, holes in sorted(holes_by_index.items())
        if len(holes) > 1
    ]
    if duplicates:
        detail = "repeated values " + "; ".join(duplicates)
    else:
        detail = "values must be the numbers 1 to 18 without repeats"
    raise CourseDataError(f"invalid stroke indexes for {tee_color} tees: {detail}")


def validate_pars(pars):
    pars = list(pars)
    if len(pars) != HOLES:
        raise CourseDataError(f"par must have {HOLES} values, got {len(pars)}")
    bad = [hole for hole, par in enumerate(pars, start=1) if par not in VALID_PARS]
    if bad:
        raise CourseDataError(
            f"par must be 3, 4 or 5 on every hole (holes {', '.join(str(h) for h in bad)})"
        )
    return pars


def validate_tee_color(tee_color: str):
    if tee_color not in TEE_COLORS:
        raise ScorecardError(f"unknown tee color {tee_color!r}")
    return tee_color


def validate_course(course):
    """Checks a course row or schema before any net strokes are computed from it."""
    if course.holes != HOLES:
        raise CourseDataError(f"course {course.name!r} has {course.holes} holes, only {HOLES} supported")
    validate_pars(course.par)
    for tee_color in TEE_COLORS:
        validate_stroke_indexes(getattr(course, f"handicaps_{tee_color}"), tee_color)
    return course


def validate_hole_entries(values, label: str):
    values = list(values)
    if len(values) != HOLES:
        raise ScorecardError(f"{label} must have {HOLES} values, got {len(values)}")
    return values
