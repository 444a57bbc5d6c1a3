"""curveroom: the Curve Room payroll simulation.

Pick a team, shape its payroll over a five-year horizon, and get scored on
how well the spending curve fits the team's situation. Teams without a
decision catalog are played with raw payroll values (slider mode); teams
with one are played by choosing branching decisions (decision mode).

Usage:
    python -m curveroom list                           # Show teams
    python -m curveroom play mets 70 80 95 100 80      # Slider mode
    python -m curveroom decide knicks 1=knicks-y1-extend 2=knicks-y2-deadline ...
"""
