from .golf_calc import format_score_to_par
from .schemas import Golfer, GolferTotals


def cumulative_score_to_par(state, golfer_id: str, up_to_hole=None) -> int:
    total = 0
    for hole in state.round_format.holes():
        if up_to_hole is not None and hole > up_to_hole:
            break
        gross = state.ledger.get_gross(hole, golfer_id)
        par = state.pars.get(hole)
        if gross is None or par is None:
            continue
        total += gross - par
    return total


def golfer_totals(state, golfer: Golfer) -> GolferTotals:
    gross_total = net_total = played = 0
    for hole in state.round_format.holes():
        gross = state.ledger.get_gross(hole, golfer.id)
        if gross is None:
            continue
        played += 1
        gross_total += gross
        net_total += state.course_allocation.net(golfer.id, hole, gross)

    return GolferTotals(
        golfer_id=golfer.id,
        name=golfer.name,
        handicap_index=golfer.handicap_index,
        course_handicap=golfer.course_handicap or 0,
        stroke_holes=state.course_allocation.holes.get(golfer.id, []),
        holes_played=played,
        gross_total=gross_total,
        net_total=net_total,
        to_par=format_score_to_par(cumulative_score_to_par(state, golfer.id)),
    )
