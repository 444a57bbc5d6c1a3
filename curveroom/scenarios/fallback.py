"""Embedded teams data, used when teams.json can't be read.

Same shape as teams.json. No decision catalogs: every team here plays in
slider mode.
"""

FALLBACK_TEAMS = {
    "knicks": {
        "id": "knicks",
        "name": "New York Knicks",
        "league": "NBA",
        "situation": "Win-Now Window",
        "difficulty": "Hard",
        "salaryCap": 141,
        "luxuryTax": 171,
        "challenge": (
            "You have a championship-caliber roster with expensive veterans. Your window "
            "to win is NOW, but the salary cap is tight. Can you manage the payroll curve "
            "to maximize your title chances while preparing for the inevitable reset?"
        ),
        "idealCurve": [90, 95, 100, 85, 70],
        "startingPayroll": 95,
        "phaseHints": {
            "1": "You're already spending big. Maintain or slightly increase to maximize your window.",
            "2": "Push spending to the max - this is your peak year to compete!",
            "3": "Championship or bust! Go all in on your stars.",
            "4": "Start thinking about the future. Begin reducing payroll gradually.",
            "5": "Reset time. Cut payroll significantly to rebuild cap flexibility.",
        },
    },
    "nets": {
        "id": "nets",
        "name": "Brooklyn Nets",
        "league": "NBA",
        "situation": "Rebuild Phase",
        "difficulty": "Medium",
        "salaryCap": 141,
        "luxuryTax": 171,
        "challenge": (
            "After trading away your stars, you're in full rebuild mode. You have young "
            "talent and cap flexibility. Build slowly, peak when your young core matures, "
            "then prepare for extensions."
        ),
        "idealCurve": [50, 60, 80, 95, 85],
        "startingPayroll": 55,
        "phaseHints": {
            "1": "Stay patient. Keep payroll low while developing young talent.",
            "2": "Slight increase as young players improve. Add role players.",
            "3": "Your young core is maturing. Start spending on key additions.",
            "4": "Peak year! Your young stars are ready - spend aggressively.",
            "5": "Maintain success or begin planning the next reset cycle.",
        },
    },
    "yankees": {
        "id": "yankees",
        "name": "New York Yankees",
        "league": "MLB",
        "situation": "Competitive Window",
        "difficulty": "Hard",
        "salaryCap": 237,
        "luxuryTax": 237,
        "challenge": (
            "The Yankees are committed to winning now with a massive payroll. Navigate "
            "arbitration years and decide when to push for a championship vs. when to "
            "reset for the future."
        ),
        "idealCurve": [95, 100, 90, 75, 65],
        "startingPayroll": 95,
        "phaseHints": {
            "1": "You're already spending heavily. Maintain competitiveness.",
            "2": "This is your best chance with current core. Go all in!",
            "3": "Begin transition. Keep competitive but start reducing.",
            "4": "Major contracts aging. Reduce payroll strategically.",
            "5": "Reset phase. Shed salary, prepare for next competitive window.",
        },
    },
    "mets": {
        "id": "mets",
        "name": "New York Mets",
        "league": "MLB",
        "situation": "Emerging Contender",
        "difficulty": "Medium",
        "salaryCap": 237,
        "luxuryTax": 237,
        "challenge": (
            "Deep pockets allow aggressive spending, but even the Mets need a strategy. "
            "Time your investments to peak when your young arms mature."
        ),
        "idealCurve": [70, 80, 95, 100, 80],
        "startingPayroll": 75,
        "phaseHints": {
            "1": "Build carefully. Invest in player development.",
            "2": "Add complementary pieces as young pitching develops.",
            "3": "Young arms maturing. Increase spending strategically.",
            "4": "Championship window open! Maximize payroll.",
            "5": "Evaluate and adjust. Begin next cycle preparation.",
        },
    },
    "jets": {
        "id": "jets",
        "name": "New York Jets",
        "league": "NFL",
        "situation": "Rookie QB Window",
        "difficulty": "Medium",
        "salaryCap": 255,
        "luxuryTax": 255,
        "challenge": (
            "With a potential franchise QB on a rookie deal, you have a 4-5 year window to "
            "build a contender before his contract explodes. Spend aggressively now while "
            "the QB cap hit is low."
        ),
        "idealCurve": [75, 90, 100, 85, 65],
        "startingPayroll": 70,
        "phaseHints": {
            "1": "Rookie QB on cheap deal. Start building around him.",
            "2": "Aggressively add talent. Your QB window is open.",
            "3": "Peak spending year! Go all-in for a championship.",
            "4": "QB extension coming. Start reducing other salaries.",
            "5": "Big QB deal kicks in. Reset other positions accordingly.",
        },
    },
    "giants": {
        "id": "giants",
        "name": "New York Giants",
        "league": "NFL",
        "situation": "Post-Star Reset",
        "difficulty": "Easy",
        "salaryCap": 255,
        "luxuryTax": 255,
        "challenge": (
            "You're rebuilding with a young QB and plenty of cap space. Be patient, develop "
            "your young core, and time your spending to peak when they're ready."
        ),
        "idealCurve": [55, 65, 80, 95, 90],
        "startingPayroll": 55,
        "phaseHints": {
            "1": "Keep payroll low. Focus on the draft and development.",
            "2": "Slight increase. Add smart veteran mentors.",
            "3": "Young core developing. Start strategic spending.",
            "4": "Your rebuild is paying off. Spend aggressively to compete.",
            "5": "Maintain success. Prepare for extension decisions.",
        },
    },
}
