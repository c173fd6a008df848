"""
Built-in task library.

Each entry is a :class:`~app.schemas.task.Task` — a micro-habit with a
pillar, duration, intensity, equipment tier, mastery level, tags and a
time-of-day slot.  Intermediate and advanced tasks form progression trees
through ``prerequisites``: a task only becomes eligible once every
prerequisite id is in the user's completed tasks.

Tags are checked against the closed vocabulary when each task is built,
so a typo here fails at import time.

To add a task, call :func:`register_task` or append to ``_TASKS``.
Library order matters: it is the final tie-break when two tasks score
identically.
"""

from __future__ import annotations

from typing import Optional

from app.schemas.task import (
    Equipment,
    Intensity,
    Level,
    Pillar,
    Slot,
    Task,
    validate_library,
)

# ======================================================================
# Catalog storage
# ======================================================================

TASK_CATALOG: dict[str, Task] = {}


def register_task(task: Task) -> None:
    """Register a task in the global catalog.

    Raises :class:`ValueError` if the id is already taken.
    """
    if task.id in TASK_CATALOG:
        raise ValueError(f"Task '{task.id}' already registered")
    TASK_CATALOG[task.id] = task


def get_task(task_id: str) -> Optional[Task]:
    """Look up a task by id.  Returns ``None`` if not found."""
    return TASK_CATALOG.get(task_id)


def all_tasks() -> list[Task]:
    """All registered tasks in library order."""
    return list(TASK_CATALOG.values())


def tasks_by_pillar(pillar: Pillar) -> list[Task]:
    return [t for t in TASK_CATALOG.values() if t.pillar is pillar]


# ======================================================================
# Helpers
# ======================================================================

# Aliases for brevity in the table below
SLP = Pillar.SLEEP_RECOVERY
CIR = Pillar.CIRCADIAN_RHYTHM
MEN = Pillar.MENTAL_RESILIENCE
NUT = Pillar.NUTRITION_METABOLISM
MOV = Pillar.MOVEMENT_MUSCLE
SUP = Pillar.SUPPLEMENTS
G = Intensity.GENTLE
M = Intensity.MODERATE
V = Intensity.VIGOROUS
BEG = Level.BEGINNER
INT = Level.INTERMEDIATE
ADV = Level.ADVANCED
AM = Slot.AM
PM = Slot.PM
ANY = Slot.ANY
EQ_NONE = Equipment.NONE
EQ_BASIC = Equipment.BASIC
EQ_GYM = Equipment.GYM

# ======================================================================
# Built-in tasks
# ======================================================================

_TASKS: list[Task] = [
    # ── Sleep & recovery ──────────────────────────────────────────
    Task(id="SLP001", pillar=SLP, minutes=5, intensity=G, level=BEG,
         tags=("sleep", "winddown", "starter"), when=PM,
         how="90 min before bed: dim screens and switch to warm light."),
    Task(id="SLP002", pillar=SLP, minutes=3, intensity=G, level=BEG,
         tags=("sleep", "temperature"), when=PM,
         how="Cool the bedroom to about 18°C (open a window or use the AC)."),
    Task(id="SLP003", pillar=SLP, minutes=4, intensity=G, level=BEG,
         tags=("sleep", "routine"), when=PM,
         how="Set a fixed bedtime with a ±30 min tolerance."),
    Task(id="SLP004", pillar=SLP, minutes=5, intensity=G, equipment=EQ_NONE, level=BEG,
         tags=("sleep", "light"), when=PM,
         how="Put on blue-light-blocking glasses 2 h before sleep."),
    Task(id="SLP005", pillar=SLP, minutes=2, intensity=G, level=BEG,
         tags=("sleep", "environment"), when=PM,
         how="Keep the phone out of the bedroom or switch it to flight mode."),
    Task(id="SLP006", pillar=SLP, minutes=3, intensity=G, level=BEG,
         tags=("sleep", "hydration"), when=PM,
         how="Last full drink 2 h before sleep, only small sips afterwards."),

    Task(id="SLP010", pillar=SLP, minutes=7, intensity=M, level=INT,
         tags=("sleep", "breathing"), when=PM, prerequisites=("SLP001",),
         how="4-7-8 breathing in bed: 4 rounds (inhale 4 s, hold 7 s, exhale 8 s)."),
    Task(id="SLP011", pillar=SLP, minutes=8, intensity=M, level=INT,
         tags=("sleep", "journaling"), when=PM, prerequisites=("SLP003",),
         how="Write a three-things gratitude journal before sleep."),
    Task(id="SLP012", pillar=SLP, minutes=10, intensity=M, level=INT,
         tags=("sleep", "stretching", "recovery"), when=PM, prerequisites=("SLP001",),
         how="10 min gentle yin yoga: child's pose, legs up the wall, reclined twist."),
    Task(id="SLP013", pillar=SLP, minutes=5, intensity=M, level=INT,
         tags=("sleep", "audio"), when=PM,
         how="Play pink noise or a sleep soundscape (e.g. rain)."),
    Task(id="SLP014", pillar=SLP, minutes=6, intensity=M, level=INT,
         tags=("sleep", "temperature"), when=PM,
         how="Warm bath or shower 1 h before sleep for a core-temperature drop."),

    Task(id="SLP020", pillar=SLP, minutes=15, intensity=M, level=ADV,
         tags=("sleep", "protocol", "advanced"), when=PM,
         prerequisites=("SLP010", "SLP012"),
         how="NSDR protocol (non-sleep deep rest): 15 min guided yoga nidra."),
    Task(id="SLP021", pillar=SLP, minutes=20, intensity=M, level=ADV,
         tags=("sleep", "tracking", "advanced"), when=ANY, prerequisites=("SLP003",),
         how="Review your sleep tracking: HRV, deep-sleep share, wake-ups."),
    Task(id="SLP022", pillar=SLP, minutes=10, intensity=M, level=ADV,
         tags=("sleep", "biohacking"), when=PM, prerequisites=("SLP014",),
         how="Glycine 3 g plus magnesium 400 mg 30 min before sleep."),

    # ── Circadian rhythm ──────────────────────────────────────────
    Task(id="CIR001", pillar=CIR, minutes=3, intensity=G, level=BEG,
         tags=("light", "morning", "starter"), when=AM,
         how="2-3 minutes of daylight outdoors, without sunglasses."),
    Task(id="CIR002", pillar=CIR, minutes=2, intensity=G, level=BEG,
         tags=("caffeine", "timing", "sleep"), when=AM,
         how="Set a caffeine cut-off 8-10 h before bed (e.g. 2 pm)."),
    Task(id="CIR003", pillar=CIR, minutes=5, intensity=G, level=BEG,
         tags=("light", "evening"), when=PM,
         how="Evenings: dimmable lamps or candles instead of ceiling lights."),
    Task(id="CIR004", pillar=CIR, minutes=3, intensity=G, level=BEG,
         tags=("timing", "meals"), when=ANY,
         how="Fixed breakfast window: the same time every day, ±1 h."),
    Task(id="CIR005", pillar=CIR, minutes=2, intensity=G, level=BEG,
         tags=("light", "screen"), when=PM,
         how="Night shift / blue-light filter on every device from 8 pm."),
    Task(id="CIR006", pillar=CIR, minutes=2, intensity=G, level=BEG,
         tags=("routine", "minimum_viable_day", "morning"), when=AM,
         how="Minimum viable day: pick the one habit you will keep even on a bad day."),
    Task(id="CIR007", pillar=CIR, minutes=3, intensity=G, level=BEG,
         tags=("meal_timing", "late_eating", "evening"), when=PM,
         how="Kitchen closes 3 h before bed: no food after that point tonight."),

    Task(id="CIR010", pillar=CIR, minutes=10, intensity=M, level=INT,
         tags=("light", "morning", "outdoor", "morning_light"), when=AM,
         prerequisites=("CIR001",),
         how="10 min morning walk without sunglasses for the cortisol peak."),
    Task(id="CIR011", pillar=CIR, minutes=5, intensity=M, level=INT,
         tags=("timing", "meals", "fasting"), when=ANY, prerequisites=("CIR004",),
         how="Eating window of 10-12 h, e.g. 8 am-6 pm or 10 am-8 pm."),
    Task(id="CIR012", pillar=CIR, minutes=8, intensity=M, level=INT,
         tags=("after_meal", "walk", "light_walk"), when=ANY,
         how="Walk slowly for 8-10 min after your largest meal to blunt the glucose spike."),
    Task(id="CIR013", pillar=CIR, minutes=3, intensity=M, level=INT,
         tags=("light", "afternoon"), when=ANY,
         how="Afternoon: 5 min of direct daylight for a second alertness boost."),

    Task(id="CIR020", pillar=CIR, minutes=15, intensity=M, level=ADV,
         tags=("light", "protocol", "advanced"), when=AM, prerequisites=("CIR010",),
         how="Light-therapy box (10,000 lux) for 15 min at breakfast in winter."),
    Task(id="CIR021", pillar=CIR, minutes=5, intensity=M, level=ADV,
         tags=("biohacking", "timing"), when=PM, prerequisites=("CIR003",),
         how="Sunset viewing: watch the evening sky for 5-10 min as a melatonin cue."),
    Task(id="CIR022", pillar=CIR, minutes=10, intensity=M, level=ADV,
         tags=("tracking", "sleep", "advanced"), when=ANY,
         prerequisites=("CIR010", "CIR011"),
         how="Chronotype fit: schedule demanding work around your natural rhythm."),

    # ── Mental resilience ─────────────────────────────────────────
    Task(id="MEN001", pillar=MEN, minutes=4, intensity=G, level=BEG,
         tags=("breath", "stress", "starter", "downshift", "breathing_exercises"), when=ANY,
         how="Box breathing 4-4-4-4: 4 rounds (inhale, hold, exhale, hold, 4 s each)."),
    Task(id="MEN002", pillar=MEN, minutes=5, intensity=G, level=BEG,
         tags=("mindfulness", "starter"), when=ANY,
         how="5 min body scan: move from feet to head and notice tension."),
    Task(id="MEN003", pillar=MEN, minutes=3, intensity=G, level=BEG,
         tags=("stress", "quick", "breathing"), when=ANY,
         how="Physiological sigh: double inhale through the nose, long exhale through the mouth. 3x."),
    Task(id="MEN004", pillar=MEN, minutes=5, intensity=G, level=BEG,
         tags=("nature", "outdoor"), when=ANY,
         how="5 min nature micro-dose: stand outside, look at the sky, breathe deeply."),
    Task(id="MEN005", pillar=MEN, minutes=3, intensity=G, level=BEG,
         tags=("gratitude", "starter"), when=ANY,
         how="Name three things you are grateful for today (aloud or in writing)."),
    Task(id="MEN006", pillar=MEN, minutes=2, intensity=G, level=BEG,
         tags=("digital", "detox"), when=ANY,
         how="Phone-free zone: one meal today completely without your phone."),
    Task(id="MEN007", pillar=MEN, minutes=5, intensity=G, level=BEG,
         tags=("social", "mental"), when=ANY,
         how="Send a voice message or call someone you have not spoken to this week."),
    Task(id="MEN008", pillar=MEN, minutes=4, intensity=G, level=BEG,
         tags=("shutdown", "routine", "evening"), when=PM,
         how="Work shutdown ritual: write tomorrow's top task, then close every tab."),

    Task(id="MEN010", pillar=MEN, minutes=10, intensity=M, level=INT,
         tags=("meditation", "focus"), when=ANY, prerequisites=("MEN001", "MEN002"),
         how="10 min focus meditation: follow the breath, return gently when distracted."),
    Task(id="MEN011", pillar=MEN, minutes=8, intensity=M, level=INT,
         tags=("journaling", "reflection"), when=PM, prerequisites=("MEN005",),
         how="Evening reflection: what went well, what could be better, one lesson."),
    Task(id="MEN012", pillar=MEN, minutes=5, intensity=M, level=INT,
         tags=("cold_exposure", "stress", "resilience"), when=AM, prerequisites=("MEN003",),
         how="Finish your shower with 30 s of cold water (chest and back, not the head)."),
    Task(id="MEN013", pillar=MEN, minutes=7, intensity=M, level=INT,
         tags=("visualization", "focus"), when=ANY, prerequisites=("MEN002",),
         how="Mental rehearsal: visualise the coming day or meeting for 5 min."),
    Task(id="MEN014", pillar=MEN, minutes=10, intensity=M, level=INT,
         tags=("nature", "walking", "outdoor"), when=ANY, prerequisites=("MEN004",),
         how="Forest bathing light: walk mindfully through green space for 10 min, using all five senses."),
    Task(id="MEN015", pillar=MEN, minutes=10, intensity=M, level=INT,
         tags=("review", "reflection", "routine"), when=ANY, prerequisites=("MEN011",),
         how="Weekly review: which habits stuck, which slipped, one adjustment for next week."),

    Task(id="MEN020", pillar=MEN, minutes=15, intensity=M, level=ADV,
         tags=("meditation", "advanced"), when=ANY, prerequisites=("MEN010",),
         how='Insight meditation: 15 min, labelling thoughts ("thinking", "planning", "worrying").'),
    Task(id="MEN021", pillar=MEN, minutes=12, intensity=M, level=ADV,
         tags=("cold_exposure_intense", "protocol", "advanced"), when=AM,
         prerequisites=("MEN012",),
         how="Cold therapy: 2 min cold shower or ice bath with controlled breathing."),
    Task(id="MEN022", pillar=MEN, minutes=20, intensity=M, level=ADV,
         tags=("flow", "deep_work"), when=ANY, prerequisites=("MEN010", "MEN006"),
         how="Deep work block: 20 min on a single task without interruption (phone away, door closed)."),
    Task(id="MEN023", pillar=MEN, minutes=10, intensity=M, level=ADV,
         tags=("breathwork", "breath_hold", "advanced"), when=ANY,
         prerequisites=("MEN001", "MEN012"),
         how="Wim Hof breathing light: 3 rounds (30 deep breaths, breath hold, recovery)."),

    # ── Nutrition & metabolism ────────────────────────────────────
    Task(id="NUT001", pillar=NUT, minutes=5, intensity=G, level=BEG,
         tags=("protein", "starter"), when=ANY,
         how="Protein first: start every meal with a palm-sized portion of protein."),
    Task(id="NUT002", pillar=NUT, minutes=3, intensity=G, level=BEG,
         tags=("hydration", "starter"), when=AM,
         how="Drink 500 ml of water right after getting up."),
    Task(id="NUT003", pillar=NUT, minutes=2, intensity=G, level=BEG,
         tags=("fiber", "vegetables"), when=ANY,
         how="Vegetable check: a fist of vegetables with every main meal."),
    Task(id="NUT004", pillar=NUT, minutes=3, intensity=G, level=BEG,
         tags=("snacking", "awareness"), when=ANY,
         how="Snack pause: wait 5 min before a snack and check for real hunger."),
    Task(id="NUT005", pillar=NUT, minutes=2, intensity=G, level=BEG,
         tags=("sugar", "timing"), when=ANY,
         how="Sugar timing: sweets only after a meal, never on an empty stomach."),
    Task(id="NUT006", pillar=NUT, minutes=3, intensity=G, level=BEG,
         tags=("alcohol", "awareness"), when=PM,
         how="Alcohol check: alcohol-free today? If not, two drinks at most."),
    Task(id="NUT007", pillar=NUT, minutes=10, intensity=G, level=BEG,
         tags=("shopping", "planning"), when=ANY,
         how="Write a shopping list built around protein, vegetables and whole foods."),

    Task(id="NUT010", pillar=NUT, minutes=10, intensity=M, level=INT,
         tags=("tracking", "awareness"), when=ANY, prerequisites=("NUT001",),
         how="Food log: record every meal today (photo or text)."),
    Task(id="NUT011", pillar=NUT, minutes=15, intensity=M, level=INT,
         tags=("meal_prep", "planning"), when=ANY, prerequisites=("NUT001",),
         how="Protein prep: prepare three portions of protein for tomorrow."),
    Task(id="NUT012", pillar=NUT, minutes=5, intensity=M, level=INT,
         tags=("glucose", "hack"), when=ANY, prerequisites=("NUT005",),
         how="Vinegar shot: 1 tbsp apple cider vinegar in water 15 min before your largest meal."),
    Task(id="NUT013", pillar=NUT, minutes=8, intensity=M, level=INT,
         tags=("fiber", "prebiotic", "anti_inflammatory"), when=ANY, prerequisites=("NUT003",),
         how="Prebiotic boost: add onion, garlic or leek to a meal."),
    Task(id="NUT014", pillar=NUT, minutes=5, intensity=M, level=INT,
         tags=("omega3", "supplement", "anti_inflammatory"), when=ANY, prerequisites=("NUT001",),
         how="Omega-3 check: oily fish or 2 g EPA/DHA today?"),

    Task(id="NUT020", pillar=NUT, minutes=20, intensity=M, level=ADV,
         tags=("meal_prep", "batch", "advanced"), when=ANY, prerequisites=("NUT011",),
         how="Batch cooking: prepare five meals for the week."),
    Task(id="NUT021", pillar=NUT, minutes=15, intensity=M, level=ADV,
         tags=("tracking", "macros", "advanced"), when=ANY, prerequisites=("NUT010", "NUT001"),
         how="Macro check: protein (1.6 g/kg), fibre (30 g+), fats."),
    Task(id="NUT022", pillar=NUT, minutes=10, intensity=M, level=ADV,
         tags=("glucose", "monitoring"), when=ANY, prerequisites=("NUT012", "NUT010"),
         how="CGM review: analyse glucose responses to meals and adjust."),
    Task(id="NUT023", pillar=NUT, minutes=5, intensity=M, level=ADV,
         tags=("microbiome", "advanced"), when=ANY, prerequisites=("NUT013",),
         how="Fermented foods: add kimchi, sauerkraut or kefir today."),

    # ── Movement & muscle ─────────────────────────────────────────
    Task(id="MOV001", pillar=MOV, minutes=10, intensity=G, equipment=EQ_NONE, level=BEG,
         tags=("steps", "neat", "beginner", "light_walk"), when=ANY,
         how="10 min walk: easy pace, nasal breathing, swing your arms."),
    Task(id="MOV002", pillar=MOV, minutes=5, intensity=G, equipment=EQ_NONE, level=BEG,
         tags=("mobility", "starter"), when=AM,
         how="Morning mobility: 5 min of gentle stretching (cat-cow, hip circles, arm circles)."),
    Task(id="MOV003", pillar=MOV, minutes=3, intensity=G, equipment=EQ_NONE, level=BEG,
         tags=("posture", "desk"), when=ANY,
         how="Posture reset: every hour shoulders back, chest open, three deep breaths."),
    Task(id="MOV004", pillar=MOV, minutes=5, intensity=G, equipment=EQ_NONE, level=BEG,
         tags=("steps", "stairs"), when=ANY,
         how="Stairs challenge: skip the lift, take the stairs."),
    Task(id="MOV005", pillar=MOV, minutes=8, intensity=G, equipment=EQ_NONE, level=BEG,
         tags=("stretching", "evening"), when=PM,
         how="Evening stretch: 8 min of gentle stretching (hip flexors, hamstrings, shoulders)."),
    Task(id="MOV006", pillar=MOV, minutes=8, intensity=G, equipment=EQ_NONE, level=BEG,
         tags=("mobility", "gentle", "low_impact", "balance"), when=ANY,
         how="Chair-supported mobility: seated marches, ankle circles, single-leg stands holding a chair."),

    Task(id="MOV010", pillar=MOV, minutes=12, intensity=M, equipment=EQ_NONE, level=INT,
         tags=("strength", "bodyweight", "beginner"), when=ANY,
         prerequisites=("MOV001", "MOV002"),
         how="Bodyweight circuit: 3 rounds of 8 squats, 6 push-ups (knees ok), 20 s plank."),
    Task(id="MOV011", pillar=MOV, minutes=18, intensity=M, equipment=EQ_NONE, level=INT,
         tags=("strength", "push_pull", "lunges"), when=ANY, prerequisites=("MOV010",),
         how="Push-pull basics: incline push-ups 3×8, towel rows 3×10, lunges 2×10."),
    Task(id="MOV012", pillar=MOV, minutes=15, intensity=M, equipment=EQ_NONE, level=INT,
         tags=("zone2", "cardio"), when=ANY, prerequisites=("MOV001",),
         how="Zone 2 walk: 15 min brisk walking, nasal breathing and conversation still possible."),
    Task(id="MOV013", pillar=MOV, minutes=10, intensity=M, equipment=EQ_NONE, level=INT,
         tags=("mobility", "hip"), when=ANY, prerequisites=("MOV002", "MOV005"),
         how="Hip mobility flow: 10 min of 90/90, pigeon, frog stretch, hip circles."),
    Task(id="MOV014", pillar=MOV, minutes=8, intensity=M, equipment=EQ_BASIC, level=INT,
         tags=("strength", "resistance"), when=ANY, prerequisites=("MOV010",),
         how="Band work: banded pull-aparts 3×15, banded squats 3×12."),
    Task(id="MOV015", pillar=MOV, minutes=20, intensity=M, equipment=EQ_NONE, level=INT,
         tags=("steps", "outdoor"), when=ANY, prerequisites=("MOV012",),
         how="Power walk: 20 min fast walking, with a slight incline if possible."),

    Task(id="MOV020", pillar=MOV, minutes=25, intensity=V, equipment=EQ_BASIC, level=ADV,
         tags=("strength", "full_body", "advanced"), when=ANY,
         prerequisites=("MOV011", "MOV014"),
         how="Full-body strength: goblet squats 4×10, push-ups 4×12, rows 4×10, planks 3×30 s."),
    Task(id="MOV021", pillar=MOV, minutes=16, intensity=V, equipment=EQ_NONE, level=ADV,
         tags=("hiit", "cardio", "jumping"), when=ANY, prerequisites=("MOV012", "MOV020"),
         how="HIIT sprints: 6× (30 s fast / 60 s easy) with stairs, burpees or sprints."),
    Task(id="MOV022", pillar=MOV, minutes=30, intensity=V, equipment=EQ_GYM, level=ADV,
         tags=("strength", "compound", "advanced"), when=ANY, prerequisites=("MOV020",),
         how="Big three light: squat 3×8, bench or push 3×8, row or pull 3×8 at moderate weight."),
    Task(id="MOV023", pillar=MOV, minutes=20, intensity=M, equipment=EQ_NONE, level=ADV,
         tags=("zone2", "running"), when=ANY, prerequisites=("MOV015", "MOV012"),
         how="Easy run: 20 min of relaxed jogging (heart-rate zone 2, conversation possible)."),
    Task(id="MOV024", pillar=MOV, minutes=15, intensity=M, equipment=EQ_NONE, level=ADV,
         tags=("mobility", "advanced", "deep_squats"), when=ANY, prerequisites=("MOV013",),
         how="Advanced mobility: Jefferson curl, deep squat hold, shoulder CARs."),
    Task(id="MOV025", pillar=MOV, minutes=30, intensity=V, equipment=EQ_GYM, level=ADV,
         tags=("strength", "compound", "heavy_lifting", "advanced"), when=ANY,
         prerequisites=("MOV022",),
         how="Heavy compound day: work up to 3×5 on squat and deadlift at a challenging weight."),

    # ── Supplements ───────────────────────────────────────────────
    Task(id="SUP001", pillar=SUP, minutes=2, intensity=G, level=BEG,
         tags=("vitamin_d", "basic"), when=AM,
         how="Vitamin D check: are you taking 2000-4000 IU daily (especially in winter)?"),
    Task(id="SUP002", pillar=SUP, minutes=2, intensity=G, level=BEG,
         tags=("magnesium", "basic"), when=PM,
         how="Evening magnesium: 200-400 mg magnesium glycinate or citrate before sleep."),
    Task(id="SUP003", pillar=SUP, minutes=3, intensity=G, level=BEG,
         tags=("creatine", "basic"), when=ANY,
         how="Daily creatine: stir 5 g creatine monohydrate into a drink."),

    Task(id="SUP010", pillar=SUP, minutes=5, intensity=M, level=INT,
         tags=("stack", "morning"), when=AM, prerequisites=("SUP001",),
         how="Morning stack: vitamin D, K2 and omega-3 with breakfast."),
    Task(id="SUP011", pillar=SUP, minutes=5, intensity=M, level=INT,
         tags=("stack", "evening"), when=PM, prerequisites=("SUP002",),
         how="Evening stack: magnesium, glycine and zinc before sleep."),
    Task(id="SUP012", pillar=SUP, minutes=3, intensity=M, level=INT,
         tags=("adaptogens",), when=ANY, prerequisites=("SUP002",),
         how="Adaptogen check: ashwagandha 300-600 mg for stress resilience."),

    Task(id="SUP020", pillar=SUP, minutes=10, intensity=M, level=ADV,
         tags=("protocol", "advanced"), when=ANY, prerequisites=("SUP010", "SUP011"),
         how="Supplement audit: review every supplement for quality and need."),
    Task(id="SUP021", pillar=SUP, minutes=5, intensity=M, level=ADV,
         tags=("bloodwork", "advanced"), when=ANY, prerequisites=("SUP020",),
         how="Plan bloodwork: book a test for vitamin D, B12, ferritin and thyroid."),
    Task(id="SUP022", pillar=SUP, minutes=3, intensity=M, level=ADV,
         tags=("nootropics", "advanced"), when=AM, prerequisites=("SUP012",),
         how="Focus stack: L-theanine 200 mg with caffeine 100 mg for focused work."),
]

# Auto-register all built-in tasks
for _task in validate_library(_TASKS):
    register_task(_task)
