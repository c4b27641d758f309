"""Fixed insight content keyed by terrain, modifier, symptom, check-in signal and weather."""

from __future__ import annotations

from terrain.domains.wellness.domain_logic.signals import Rule
from terrain.domains.wellness.domain_logic.terrain_models import (
    COLD_BALANCED,
    COLD_DEFICIENT,
    MODIFIER_DAMP,
    MODIFIER_DRY,
    MODIFIER_SHEN,
    MODIFIER_STAGNATION,
    NEUTRAL_BALANCED,
    NEUTRAL_DEFICIENT,
    NEUTRAL_EXCESS,
    WARM_BALANCED,
    WARM_DEFICIENT,
    WARM_EXCESS,
)

# ---------------------------------------------------------------------------
# Headline
# ---------------------------------------------------------------------------

BASE_WISDOM = {
    COLD_DEFICIENT: "Kindle gently.",
    COLD_BALANCED: "Warm within.",
    NEUTRAL_DEFICIENT: "Build steady.",
    NEUTRAL_BALANCED: "Stay anchored.",
    NEUTRAL_EXCESS: "Move freely.",
    WARM_BALANCED: "Keep flowing.",
    WARM_EXCESS: "Cool down.",
    WARM_DEFICIENT: "Nourish deeply.",
}

BASE_TRUTHS = {
    COLD_DEFICIENT: (
        "Your Spleen needs warmth to transform food into energy.",
        "Cold patterns run deep. Rebuild with patience.",
    ),
    COLD_BALANCED: (
        "Your center holds steady when kept warm.",
        "Morning warmth sets the tone for the whole day.",
    ),
    NEUTRAL_DEFICIENT: (
        "Your reserves are precious. Spend wisely.",
        "Small nourishments compound into lasting strength.",
    ),
    NEUTRAL_BALANCED: (
        "Balance is your gift. Protect it with rhythm.",
        "Your body knows what it needs. Listen.",
    ),
    NEUTRAL_EXCESS: (
        "Excess qi seeks movement to stay clear.",
        "What doesn't flow, stagnates.",
    ),
    WARM_BALANCED: (
        "Your inner fire burns bright. Feed it wisely.",
        "Heat rises. Ground yourself with cooling roots.",
    ),
    WARM_EXCESS: (
        "Your Liver holds tension. Release before it builds.",
        "Intensity without rest depletes even strong reserves.",
    ),
    WARM_DEFICIENT: (
        "Your flame burns hot but fuel runs low.",
        "Rest is not weakness. It's how you refill.",
    ),
}

MODIFIER_TRUTHS = {
    MODIFIER_DAMP: "Dampness weighs on your Spleen. Light, warm foods cut through.",
    MODIFIER_DRY: "Dryness craves moisture. Soups and seeds nourish your fluids.",
    MODIFIER_STAGNATION: "Stuck qi needs movement. Even sighing helps it flow.",
    MODIFIER_SHEN: "Your spirit runs restless. Stillness is medicine today.",
}

# Checked in this order; the first symptom present sets the headline.
SYMPTOM_HEADLINES: list[tuple[str, str, tuple[str, ...]]] = [
    ("stressed", "Breathe first.", (
        "Stress tightens the Liver and blocks qi flow.",
        "Your nervous system is asking for pause, not push.",
    )),
    ("poor_sleep", "Rest deep.", (
        "Poor sleep scatters the Shen and weakens tomorrow.",
        "Your body repairs between 11pm and 3am. Honor that window.",
    )),
    ("cramps", "Soften now.", (
        "Cramps signal stagnation. Warmth and movement help.",
        "Blood needs to flow freely. Gentle heat opens the path.",
    )),
    ("headache", "Ease tension.", (
        "Headaches often rise from Liver qi pushing upward.",
        "Less stimulation, more space. Your head needs quiet.",
    )),
    ("cold", "Warm through.", ()),
    ("bloating", "Move light.", (
        "Bloating means your Spleen is struggling to transform.",
        "Light meals and gentle walks help qi descend.",
    )),
    ("stiff", "Stretch slow.", (
        "Stiffness is stuck qi in the channels.",
        "Movement, even small, reminds your body to flow.",
    )),
    ("tired", "Restore now.", (
        "Fatigue is your body's honest request for rest.",
        "Pushing through tired only deepens the debt.",
    )),
]

COLD_SYMPTOM_TRUTH_COLD = "Feeling cold on a cold pattern. Your fire needs stoking."
COLD_SYMPTOM_TRUTH_WARM = "Feeling cold despite inner warmth. Your defenses are down."
COLD_SYMPTOM_TRUTH_NEUTRAL = "Cold creeps in when qi is weak. Warm from within."

# Check-in wisdom: (signal value) -> (wisdom, truth)
SLEEP_HEADLINES = {
    "hard_to_fall_asleep": ("Settle early.", "Difficulty falling asleep often signals Shen disturbance."),
    "woke_middle_of_night": ("Let go.", "Waking in the small hours suggests Liver qi stagnation."),
    "woke_early": ("Nourish deeply.", "Early waking can indicate yin deficiency."),
    "unrefreshing": ("Lighten up.", "Unrefreshing sleep often signals damp accumulation."),
}

EMOTION_HEADLINES = {
    "irritable": ("Ease tension.", "Irritability signals Liver qi rising."),
    "worried": ("Ground down.", "Worry taxes the Spleen."),
    "anxious": ("Rest deep.", "Anxiety often roots in Kidney deficiency."),
    "sad": ("Breathe deep.", "Grief affects the Lung."),
    "restless": ("Settle early.", "Restlessness signals unsettled Shen."),
    "overwhelmed": ("Simplify today.", "Overwhelm depletes Spleen and Kidney."),
}

THERMAL_HEADLINES = {
    "cold": ("Warm through.", "Feeling cold despite warm terrain points to temporary yang depletion."),
    "hot": ("Cool gently.", "Feeling hot despite a cold pattern is often deficiency heat."),
}

STOOL_HEADLINES = {
    "loose": ("Warm your center.", "Loose stools suggest Spleen qi deficiency."),
    "constipated": ("Moisten within.", "Constipation often indicates heat or yin deficiency."),
    "sticky": ("Lighten up.", "Sticky stools suggest dampness."),
    "mixed": ("Keep rhythm.", "Variable digestion suggests Liver-Spleen disharmony."),
}

APPETITE_HEADLINES = {
    "none": ("Warm your center.", "No appetite often signals Spleen qi stagnation."),
    "low": ("Eat gently.", "Low appetite asks for easily digestible, warm food."),
    "strong": ("Cool gently.", "Strong appetite can indicate stomach heat."),
}

WEATHER_TRUTHS = {
    "cold": {
        "cold": "Cold outside meets cold within. Extra layers and warm drinks are medicine.",
        "warm": "Cold air cools your inner heat naturally. Use it wisely.",
        None: "Cold day. Your body needs more fuel to stay warm.",
    },
    "hot": {
        "warm": "Heat outside compounds heat within. Cool foods and slow pace.",
        "cold": "Warm day warms your cold pattern. Enjoy, but don't overheat.",
        None: "Hot day. Stay hydrated and rest during peak heat.",
    },
    "humid": {None: "Damp air burdens the Spleen. Keep meals light and warm."},
    "rainy": {None: "Damp air burdens the Spleen. Keep meals light and warm."},
    "dry": {None: "Dry air pulls moisture. Soups and pears nourish your fluids."},
    "windy": {None: "Wind scatters qi. Protect your neck and stay grounded."},
}

LOW_STEPS = 2000
HIGH_STEPS = 10000

LOW_STEP_TRUTH_EXCESS = "Low movement today. Your excess qi has nowhere to go."
LOW_STEP_TRUTH = "Stillness has its place, but even gentle walks shift stagnant energy."
HIGH_STEP_TRUTH_DEFICIENT = "High movement. Make sure to replenish what you've spent."
HIGH_STEP_TRUTH = "Active day. Your qi is flowing well."


# ---------------------------------------------------------------------------
# Do / don't: (text, priority, why_for_you)
# ---------------------------------------------------------------------------

BASE_DOS = {
    COLD_DEFICIENT: [
        ("Warm start", 1, "Your digestive fire runs low in the morning. Warm food kindles it, like warming up a car engine on a cold morning."),
        ("Cooked food", 2, "Raw food requires more energy to digest. Cooking pre-processes it, so your body spends less effort breaking it down."),
        ("Gentle movement", 3, "Light activity generates warmth without depleting your reserves. Intense exercise can drain what you're trying to build."),
        ("Rest when tired", 4, "Your system runs on a smaller battery. Pushing through fatigue costs you more than it costs other types."),
    ],
    COLD_BALANCED: [
        ("Warm drinks", 1, "Your core temperature runs cool. Warm beverages maintain your internal warmth like adding fuel to a steady fire."),
        ("Moderate activity", 2, "Movement generates warmth from within. Consistent moderate activity keeps your flame steady."),
        ("Warm layers", 3, "Cold accumulates quietly in your type. Staying warm prevents sluggishness before it starts."),
        ("Grounding foods", 4, "Root vegetables and grains anchor your energy and provide sustained warmth."),
    ],
    NEUTRAL_DEFICIENT: [
        ("Consistent meals", 1, "Your body thrives on predictable fuel. Regular meals prevent the energy dips you're prone to."),
        ("Early sleep", 2, "Sleep is when you rebuild. You recover faster than other types, but only if you actually rest."),
        ("Gentle exercise", 3, "Gentle routines give big returns for your type. Intensity costs more than it gains."),
        ("Nourishing broths", 4, "Easy-to-digest warm liquids deliver nutrients without taxing your digestion."),
    ],
    NEUTRAL_BALANCED: [
        ("Keep your rhythm", 1, "Consistency is your superpower. Your body adapts fast and routine keeps you calibrated."),
        ("Balanced portions", 2, "You can handle variety, but your body loves moderation. Neither too much nor too little."),
        ("Regular exercise", 3, "Movement maintains your natural balance. It's preventive maintenance for your type."),
        ("Variety in diet", 4, "Seasonal variety keeps your adaptable system well-rounded."),
    ],
    NEUTRAL_EXCESS: [
        ("Move your body", 1, "Excess energy stagnates when still. Movement is your release valve and your body needs it daily."),
        ("Express creatively", 2, "Suppressed energy turns into tension. Creative outlets channel your drive productively."),
        ("Deep breathing", 3, "Breath is the fastest way to move stuck energy. Even 3 deep breaths shifts your state."),
        ("Light meals", 4, "Heavy food adds to the stuckness. Light meals keep energy flowing freely."),
    ],
    WARM_BALANCED: [
        ("Stay hydrated", 1, "Your warmth burns through fluids faster. Room-temperature water throughout the day keeps your flame clean."),
        ("Cool foods", 2, "Cooling foods balance your natural heat without shocking your system the way ice does."),
        ("Evening wind-down", 3, "Your body holds heat. A deliberate cool-down prevents restless sleep."),
        ("Shade and rest", 4, "When external heat meets internal warmth, you overheat faster. Shade is medicine for you."),
    ],
    WARM_EXCESS: [
        ("Cooling foods", 1, "Your system runs hot with excess energy. Cooling foods act like a thermostat, bringing you back to center."),
        ("Slow down", 2, "Your intensity is an asset, but it burns fuel fast. Pacing prevents the crash."),
        ("Evening quiet", 3, "Your nervous system needs a deliberate signal to downshift. Quiet evenings protect your sleep."),
        ("Release tension", 4, "Excess energy held in the body becomes heat and tension. Release prevents buildup."),
    ],
    WARM_DEFICIENT: [
        ("Moistening foods", 1, "Your warmth dries you out from inside. Moistening foods like pear and honey replenish what heat depletes."),
        ("Early rest", 2, "You burn bright but thin. Evening rest prevents the wired-tired state your type is prone to."),
        ("Gentle hydration", 3, "Sipping throughout the day keeps you nourished. Gulping cold water shocks your system."),
        ("Avoid overwork", 4, "You have less reserve than your energy suggests. Protect what you have."),
    ],
}

BASE_DONTS = {
    COLD_DEFICIENT: [
        ("Ice drinks", 1, "Cold drinks extinguish digestive fire. For your type, that's like pouring water on an already-small campfire."),
        ("Raw salads", 2, "Raw food requires extra energy to process. Your digestion is already working hard and cooked food gives it a break."),
        ("Skipping meals", 3, "Your energy tank is smaller. Skipping meals empties it faster than other types."),
        ("Overexertion", 4, "Intense exercise depletes warmth and qi. It costs you double what it costs warmer types."),
    ],
    COLD_BALANCED: [
        ("Cold foods", 1, "Cold accumulates in your type. Each cold input makes the next one hit harder."),
        ("Cold exposure", 2, "External cold weakens your core warmth. Layering is more effective than toughing it out."),
        ("Heavy dairy", 3, "Dairy can create dampness, which compounds cold patterns."),
        ("Late nights", 4, "Sleep rebuilds warmth. Late nights drain what you spent the day building."),
    ],
    NEUTRAL_DEFICIENT: [
        ("Overworking", 1, "You feel it in sleep, digestion and focus when you overcommit. Protect your limits."),
        ("Skipping rest", 2, "Rest is when your body rebuilds. Skipping it compounds tomorrow's deficit."),
        ("Heavy exercise", 3, "Intensity depletes faster than it builds for your type. Gentle and consistent wins."),
        ("Irregular meals", 4, "Your digestion needs rhythm. Irregular eating creates energy rollercoasters."),
    ],
    NEUTRAL_BALANCED: [
        ("Extremes", 1, "Your balance is your strength. Extremes in any direction throw you off center."),
        ("Overthinking", 2, "Analysis paralysis disrupts your natural rhythm. Trust your instincts."),
        ("Skipping routine", 3, "When your schedule breaks, your body follows. Routine is your anchor."),
        ("Excess anything", 4, "Too much of even good things disrupts balance. Moderation is your medicine."),
    ],
    NEUTRAL_EXCESS: [
        ("Sitting too long", 1, "Stuck body equals stuck energy. Movement is essential for your type, not optional."),
        ("Suppressing", 2, "Held-in energy turns into tension. Better out than in, through movement or expression."),
        ("Heavy foods", 3, "Heavy meals add to stagnation. Light food keeps your energy flowing."),
        ("Rushing", 4, "Rushing adds tension to a system already full. Pacing releases pressure."),
    ],
    WARM_BALANCED: [
        ("Spicy foods", 1, "You're already warm inside. Spice adds heat to heat and your skin and sleep show it first."),
        ("Overheating", 2, "External heat compounds your internal warmth. Seek shade and cool environments."),
        ("Late nights", 3, "Night is when your body cools down. Late activity keeps the heat running."),
        ("Alcohol", 4, "Alcohol generates heat and disrupts sleep, two things your type is already managing."),
    ],
    WARM_EXCESS: [
        ("Stimulants", 1, "Your system is already running hot. Caffeine and stimulants add fuel to a fire that's already big."),
        ("Spicy food", 2, "Heat on heat. Your body needs cooling inputs, not more intensity."),
        ("Confrontation", 3, "Emotional heat compounds physical heat. Choose your battles wisely today."),
        ("Pushing through", 4, "Your intensity masks fatigue. Pushing through costs you more than you realize."),
    ],
    WARM_DEFICIENT: [
        ("Drying foods", 1, "Your warmth already dries you out. Dry, crunchy foods accelerate fluid loss."),
        ("Excess coffee", 2, "Coffee heats and dries, both things your type needs less of."),
        ("Late nights", 3, "Night is your repair window. Your reserves are thinner, so use sleep wisely."),
        ("Overexertion", 4, "You feel warm but may be running on fumes. Gentle is your speed."),
    ],
}

# modifier -> (do, don't); priority 0 puts them ahead of the base list.
MODIFIER_DO_DONTS = {
    MODIFIER_DAMP: (
        ("Light movement", 0, "Dampness is heavy and stagnant. Movement helps your body process and drain what's stuck."),
        ("Heavy dairy", 0, "Dairy creates more dampness in your system, like adding water to soggy ground."),
    ),
    MODIFIER_DRY: (
        ("Moistening foods", 0, "Your body runs dry. Pear, honey and soups replenish the fluids your system needs."),
        ("Drying alcohol", 0, "Alcohol heats and dries. For your modifier, it accelerates the depletion you're managing."),
    ),
    MODIFIER_STAGNATION: (
        ("Move and stretch", 0, "Your energy gets stuck easily. Physical movement is the most direct way to get it flowing again."),
        ("Sitting still", 0, "Stillness compounds stagnation. Even micro-breaks help keep your qi circulating."),
    ),
    MODIFIER_SHEN: (
        ("Calming routine", 0, "Your mind races more than most. A structured wind-down gives your spirit a place to settle."),
        ("Screen time late", 0, "Screens stimulate an already-active mind. Your shen needs quiet signals to settle for sleep."),
    ),
}

# symptom -> (do, don't or None), in the order they are listed.
SYMPTOM_DO_DONTS = {
    "stressed": (
        ("Deep breaths", 0, "Breath activates your parasympathetic nervous system, the body's built-in calm switch."),
        ("Caffeine", 0, "Caffeine amplifies the stress response. Your system needs calming, not more stimulation."),
    ),
    "poor_sleep": (
        ("Early wind-down", 0, "Your body needs lead time to transition to rest. Starting earlier helps."),
        ("Late screens", 0, "Blue light suppresses melatonin. Your sleep cycle needs a clear signal."),
    ),
    "cramps": (
        ("Warmth on belly", 0, "Heat relaxes smooth muscle and improves blood flow to cramping areas."),
        ("Cold drinks", 0, "Cold constricts blood vessels and can worsen cramping. Warm drinks help."),
    ),
    "headache": (
        ("Gentle neck stretches", 0, "Tension in the neck and shoulders often feeds headaches. Gentle stretches release the grip."),
        ("Excess screen time", 0, "Screen glare and posture strain contribute to headache patterns. Take breaks."),
    ),
    "cold": (
        ("Warm ginger tea", 0, "Ginger disperses cold from within. A cup now helps warm your center for hours."),
        None,
    ),
    "bloating": (
        ("Post-meal walk", 0, "Gentle walking stimulates digestion and helps move trapped gas and food."),
        ("Large meals", 0, "A bloated system needs smaller inputs. Smaller meals let your digestion catch up."),
    ),
    "stiff": (
        ("Movement breaks", 0, "Stiffness is your body asking to move. Short breaks throughout the day prevent buildup."),
        ("Sitting still", 0, "Prolonged stillness creates more stiffness. Even 2 minutes of stretching helps."),
    ),
    "tired": (
        ("Rest without guilt", 0, "Fatigue is a request, not a failure. Rest now prevents a deeper deficit tomorrow."),
        ("Pushing through", 0, "Running on empty borrows from tomorrow's energy."),
    ),
}

# Check-in values -> (do, don't or None)
SLEEP_DO_DONTS = {
    "hard_to_fall_asleep": (
        ("Calming wind-down", 0, "Trouble falling asleep points to an unsettled Shen. A quiet hour before bed gives it time to settle."),
        ("Late stimulation", 0, "Screens, news and hard conversations keep the mind racing past bedtime."),
    ),
    "woke_middle_of_night": (
        ("Release tension before bed", 0, "Waking in the small hours suggests Liver qi stagnation. Stretching or journaling lets it go."),
        ("Late heavy dinners", 0, "A full stomach at night keeps the Liver working when it should rest."),
    ),
    "woke_early": (
        ("Nourishing evening food", 0, "Early waking can indicate yin deficiency. Moistening foods at dinner help you sleep through."),
        None,
    ),
    "unrefreshing": (
        ("Lighter dinners", 0, "Unrefreshing sleep often signals damp accumulation. A lighter evening meal helps."),
        ("Sweets at night", 0, "Sugar before bed adds to the heaviness you wake up with."),
    ),
}

EMOTION_DO_DONTS = {
    "irritable": (
        ("Stretch it out", 0, "Irritability signals Liver qi rising. Stretching and sour flavors help it settle."),
        ("Bottling it up", 0, "Held frustration builds heat. Let it out through movement."),
    ),
    "worried": (
        ("Warm, grounding meals", 0, "Worry taxes the Spleen. Warm, nourishing food grounds you."),
        None,
    ),
    "anxious": (
        ("Rest and warmth", 0, "Anxiety often roots in Kidney deficiency. Rest and warmth restore."),
        ("Extra caffeine", 0, "Stimulants feed the anxious edge your body is already on."),
    ),
    "sad": (
        ("Deep breathing", 0, "Grief affects the Lung. Slow, deep breaths support it."),
        None,
    ),
    "restless": (
        ("Calming routine", 0, "Restlessness signals unsettled Shen. A steady routine before bed helps it settle."),
        ("Screen time late", 0, "Screens stimulate an already-restless mind."),
    ),
    "overwhelmed": (
        ("Simplify today", 0, "Overwhelm depletes Spleen and Kidney. Fewer commitments restore more than you think."),
        ("Overcommitting", 0, "Every extra task draws on reserves that are already low."),
    ),
}

THERMAL_DO_DONTS = {
    "cold": (
        ("Warm drinks and layers", 0, "You're feeling colder than your terrain would suggest. Warmth protects your yang today."),
        ("Iced drinks", 0, "Cold inputs on a cold day deepen the chill."),
    ),
    "hot": (
        ("Hydrate and rest", 0, "Feeling hot on a cold pattern is often deficiency heat. Rest and fluids calm it."),
        ("Spicy food", 0, "Extra heat adds to what you're already feeling."),
    ),
}

STOOL_DO_DONTS = {
    "loose": (
        ("Warm, cooked food", 0, "Loose stools suggest Spleen qi deficiency. Cooked food is easier to transform."),
        ("Cold and raw food", 0, "Cold and raw inputs weaken a Spleen that is already struggling."),
    ),
    "constipated": (
        ("More fluids and fiber", 0, "Constipation often indicates heat or yin deficiency. Fluids and fiber keep things moving."),
        None,
    ),
    "sticky": (
        ("Light meals", 0, "Sticky stools suggest dampness. Lighter meals help your body drain it."),
        ("Greasy food and dairy", 0, "Both add to the dampness your digestion is working through."),
    ),
    "mixed": (
        ("Regular meal times", 0, "Variable digestion suggests Liver-Spleen disharmony. Rhythm helps both."),
        None,
    ),
}

WEATHER_DO_DONTS = {
    "cold": (
        ("Warm ginger tea", 0, "Cold weather calls for internal warming. Ginger disperses cold and supports digestion."),
        ("Cold drinks", 0, "Adding cold to a cold day taxes your system. Warm and room-temperature are best."),
    ),
    "hot": (
        ("Room-temp water often", 0, "Heat increases fluid loss. Frequent sipping prevents dehydration without shocking your digestion."),
        ("Heavy meals at midday", 0, "Your body diverts energy to cooling in hot weather. Light meals keep you from overheating."),
    ),
    "humid": (
        ("Light warm meals", 0, "External dampness adds to internal dampness. Light, warm food helps your spleen process what's accumulating."),
        ("Dairy and sweets", 0, "Dairy and sugar generate dampness. On a humid day, they compound what the weather is already doing."),
    ),
    "dry": (
        ("Moistening soups", 0, "Dry air pulls moisture from your body. Soups and stews replenish what the environment takes."),
        ("Excess coffee", 0, "Coffee is warming and drying. On a dry day, it accelerates fluid depletion."),
    ),
    "windy": (
        ("Protect your neck", 0, "Wind is said to enter through the back of the neck. A scarf or collar shields this vulnerable point."),
        None,
    ),
}
WEATHER_DO_DONTS["rainy"] = WEATHER_DO_DONTS["humid"]

ALCOHOL_DO = ("Warm congee mornings after", 0, "Congee gently restores your spleen after alcohol taxes it. Think of it as a warm reset for your digestive center.")
ALCOHOL_DONT = ("Cold drinks after alcohol", 0, "Alcohol generates dampness and heat. Cold drinks on top of that shock your digestion while it's already processing.")
SMOKING_DO = ("Moistening foods (pears, honey)", 0, "Smoke dries your lung tissue and throat. Moistening foods replenish the fluids that smoke depletes.")
LOW_STEPS_DO = ("Gentle movement", 0, "Low movement days let qi stagnate. Even a short walk helps keep energy circulating.")
HIGH_STEPS_DO = ("Nourishing recovery food", 0, "High activity depletes qi and fluids. Warm, nourishing food helps your body rebuild what movement used.")

ALCOHOL_TRIGGERS = frozenset({"weekly", "daily"})
SMOKING_TRIGGERS = frozenset({"occasional", "regular"})

MAX_TRUTHS = 4
MAX_DO_DONTS = 4


# ---------------------------------------------------------------------------
# Life areas: (reading, balance advice, focus, reason detail)
# ---------------------------------------------------------------------------

ENERGY_READINGS = {
    COLD_DEFICIENT: ("Your energy reserves run low. The fire that powers you burns small: gentle, not roaring. You build strength through accumulation, not intensity.",
                     "Warm starts, cooked foods and paced activity. Rest when tired rather than pushing through.",
                     "moderate", "Your terrain shows deficient patterns"),
    COLD_BALANCED: ("Your energy is steady but cool. You maintain well when warmth is protected. Cold inputs drain faster than you realize.",
                    "Warm drinks, layered clothing and consistent routines keep your fuel steady.",
                    "neutral", "You have a cool-balanced constitution"),
    NEUTRAL_DEFICIENT: ("Your energy needs deliberate building. Your reserves don't refill automatically. Each rest period and nourishing meal matters.",
                        "Regular meals, early sleep and gentle movement compound into sustainable energy.",
                        "moderate", "Your terrain shows deficient patterns"),
    NEUTRAL_BALANCED: ("Your energy is naturally stable. You adapt well and maintain balance without dramatic swings. Consistency is your superpower.",
                       "Protect your rhythm. Don't sacrifice sleep or meals for productivity; your balance depends on it.",
                       "neutral", "You have balanced energy reserves"),
    NEUTRAL_EXCESS: ("You have energy to spare. The challenge isn't generating it, it's channeling it. Unused energy turns into restlessness or tension.",
                     "Movement, creative outlets and physical release prevent buildup. Don't let energy stagnate.",
                     "moderate", "Your terrain shows excess patterns"),
    WARM_BALANCED: ("Your inner fire burns bright and steady. Heat drives your energy but needs management to prevent overheating.",
                    "Hydration, cooling foods and evening wind-down keep your flame clean and sustainable.",
                    "neutral", "You have a warm-balanced constitution"),
    WARM_EXCESS: ("Your energy runs hot and high. Intensity comes naturally but burns fuel fast. The crash follows the sprint.",
                  "Cooling foods, paced activity and deliberate rest prevent burnout. Slow is sustainable.",
                  "priority", "Your terrain shows warm-excess patterns"),
    WARM_DEFICIENT: ("Your flame burns bright but thin. You look energetic but run on fumes. The gap between appearance and reserves needs bridging.",
                     "Moistening foods, early rest and avoiding overcommitment rebuild what intensity depletes.",
                     "priority", "Your terrain shows deficient patterns"),
}

DIGESTION_READINGS = {
    COLD_DEFICIENT: ("Your digestive fire needs protection. Cold foods and drinks extinguish the flame that transforms food into energy. Warmth is medicine.",
                     "Cooked foods, warm drinks and ginger support your digestion. Avoid ice and raw meals.",
                     "moderate", "Cold patterns affect digestion first"),
    NEUTRAL_DEFICIENT: ("Your digestion works but tires easily. Large meals overwhelm; regular small ones sustain. Timing matters as much as content.",
                        "Easy-to-digest foods, consistent meal times and chewing thoroughly help your system keep up.",
                        "moderate", "Deficiency shows in digestive stamina"),
    NEUTRAL_BALANCED: ("Your digestion handles variety well. You can adapt to different foods without major consequences. Moderation keeps it that way.",
                       "Don't take your adaptability for granted. Balanced portions and variety maintain your flexibility.",
                       "neutral", "Balanced digestion is your baseline"),
    NEUTRAL_EXCESS: ("Your digestion is strong but can become sluggish when energy doesn't move. Heavy meals plus inactivity equals stagnation.",
                     "Light meals, post-meal walks and avoiding greasy foods keep things flowing.",
                     "neutral", "Excess patterns need movement to digest well"),
    WARM_BALANCED: ("Your digestion runs hot. It processes quickly but can become inflamed. Cooling foods soothe without slowing things down.",
                    "Cool foods, bitter greens and avoiding spicy meals keep digestive heat in check.",
                    "moderate", "Warm patterns tend toward digestive heat"),
    WARM_DEFICIENT: ("Your digestion is warm but delicate. Heat dries the stomach, so you need moisture as much as you need fuel.",
                     "Moistening soups, gentle vegetables and hydration between meals nourish without aggravating.",
                     "moderate", "Warm-deficient needs moisture"),
}
DIGESTION_READINGS[COLD_BALANCED] = DIGESTION_READINGS[COLD_DEFICIENT]
DIGESTION_READINGS[WARM_EXCESS] = DIGESTION_READINGS[WARM_BALANCED]

SLEEP_READINGS = {
    COLD_DEFICIENT: ("Sleep rebuilds what day depletes. Your reserves are smaller, so every hour of quality rest compounds into tomorrow's energy.",
                     "Warm feet before bed, earlier bedtimes and avoiding cold drinks at night support deep sleep.",
                     "neutral", "Deficiency makes rest more precious"),
    COLD_BALANCED: ("Your sleep is stable when warmth is protected. Cold bedrooms might feel fresh but can disturb your rest.",
                    "Warm blankets, consistent bedtime and a wind-down routine anchor your sleep.",
                    "neutral", "Cool constitutions need warmth to sleep well"),
    NEUTRAL_DEFICIENT: ("Sleep is your primary repair mechanism. You notice the difference when you don't get enough: it shows in energy, focus and mood.",
                        "Prioritize 8+ hours. Earlier bedtime beats sleeping in. Wind down rather than powering down.",
                        "moderate", "Deficiency means sleep is extra important"),
    NEUTRAL_BALANCED: ("Your sleep is naturally stable. You recover well when you give yourself the hours. Consistency matters more than tricks.",
                       "Regular schedule, no screens before bed and protecting your rhythm keep sleep reliable.",
                       "neutral", "Balanced sleep is your baseline"),
    NEUTRAL_EXCESS: ("Excess energy can make settling difficult. Your body has fuel to burn and needs release before it can rest.",
                     "Physical activity earlier in the day, journaling at night and releasing tension before bed.",
                     "moderate", "Excess energy affects settling"),
    WARM_BALANCED: ("Heat rises at night. Your body holds warmth that can disturb sleep if not released through deliberate cool-down.",
                    "Cool room, light evening meals and a wind-down routine help heat dissipate for rest.",
                    "moderate", "Warm constitutions need to cool before sleep"),
    WARM_EXCESS: ("Your mind and body run hot at night. The intensity that drives you during the day keeps running when you need it to stop.",
                  "Evening quiet, no screens, cooling tea and deliberate downshift are essential.",
                  "priority", "Warm-excess patterns disrupt sleep"),
    WARM_DEFICIENT: ("You look wired but feel tired. The nervous system runs even when reserves are low; anxiety at bedtime masks exhaustion.",
                     "Calming routines, nourishing evening food and permission to rest even when your mind races.",
                     "priority", "Warm-deficient often has restless sleep"),
}

MOOD_READINGS = {
    COLD_DEFICIENT: ("Mood follows energy. When reserves are low, the emotional buffer shrinks. You feel more, tire faster emotionally.",
                     "Warmth and nourishment lift spirits. Rest before you're depleted. Small comforts matter.",
                     "neutral", "Deficiency affects emotional reserves"),
    COLD_BALANCED: ("Your emotional baseline is steady but sensitive to cold and isolation. Connection and warmth support your mood.",
                    "Warm drinks, social connection and sunlight when possible lift your spirits.",
                    "neutral", "Cool constitutions need warmth for mood"),
    NEUTRAL_DEFICIENT: ("Your mood reflects your resources. When depleted, worry and doubt creep in. When nourished, clarity returns.",
                        "Rest is not laziness. Small accomplishments count. Nourish before pushing.",
                        "neutral", "Deficiency patterns show in worry"),
    NEUTRAL_BALANCED: ("Your emotional life is stable. You don't swing dramatically; consistency and rhythm support your natural equilibrium.",
                       "Protect your routines. Balance prevents the extremes your system doesn't handle well.",
                       "neutral", "Balanced mood is your baseline"),
    NEUTRAL_EXCESS: ("You feel things strongly. Emotions build up and need outlets. Suppression creates pressure that leaks out sideways.",
                     "Express rather than hold. Movement, creativity and voicing feelings release what builds.",
                     "moderate", "Excess patterns need emotional release"),
    WARM_BALANCED: ("Your emotional temperature runs warm. Passion is an asset but can tip into irritability when heat builds.",
                    "Cooling practices help mood. Don't let frustration accumulate; release before it builds.",
                    "moderate", "Warm patterns can tip to irritability"),
    WARM_EXCESS: ("Intensity is your baseline. Emotions come fast and strong. The heat that drives you can also burn bridges.",
                  "Pause before reacting. Cool the system to cool the mood. Evening quiet is essential.",
                  "priority", "Warm-excess affects emotional regulation"),
    WARM_DEFICIENT: ("Anxiety runs beneath the surface. Your nervous system is depleted but doesn't know how to stop.",
                     "Rest is your reset. Nourish the nervous system. Let yourself stop before you crash.",
                     "priority", "Warm-deficient often feels anxious"),
}

# area -> (modifier, reading, advice, focus, reason detail)
MODIFIER_AREA_OVERRIDES = {
    "digestion": (MODIFIER_DAMP,
                  "Dampness sits heavy on digestion. Your spleen struggles to process moisture; it shows as bloating, sluggishness or foggy thinking.",
                  "Avoid dairy, sugar and greasy foods. Light, warm meals help your spleen drain what's stuck.",
                  "priority", "Damp modifier directly affects digestion"),
    "sleep": (MODIFIER_SHEN,
              "Your spirit runs active. The mind doesn't settle easily: thoughts loop, sleep eludes and rest feels incomplete.",
              "Extra wind-down time, calming herbs and no stimulation after dinner help settle the shen.",
              "priority", "Shen modifier directly affects sleep"),
    "mood": (MODIFIER_STAGNATION,
             "Emotions get stuck like energy gets stuck. What isn't expressed builds pressure. Movement helps mood as much as body.",
             "Physical release, creative expression and not suppressing feelings keep emotions flowing.",
             "moderate", "Stagnation affects emotional flow"),
}

# area -> (symptom, reading, advice)
SYMPTOM_AREA_OVERRIDES = {
    "energy": ("tired",
               "Fatigue is present. Your body is honest when it's depleted. This isn't laziness, it's a request for rest.",
               None),
    "digestion": ("bloating",
                  "Bloating is present. Your digestion is asking for space: smaller inputs, gentler processing, time to catch up.",
                  "Small frequent meals, post-meal walks and fennel or mint tea help move trapped energy."),
    "sleep": ("poor_sleep",
              "Sleep was poor recently. The deficit compounds, so today needs gentleness and tonight needs protection.",
              "No caffeine after noon, early wind-down and prioritizing rest over productivity today."),
    "mood": ("stressed",
             "Stress is present and pressing. Your nervous system is on high alert and the body needs signals of safety.",
             "Deep breaths, reduced stimulation and permission to pause. You don't have to solve everything today."),
}

# Check-in overrides: value -> (reading, advice, focus)
SLEEP_SIGNAL_READINGS = {
    "hard_to_fall_asleep": ("Difficulty falling asleep often signals Shen disturbance. The mind is still running when the body wants to stop.",
                            "Calming herbs, a screen-free hour and a steady bedtime help the spirit settle.", "priority"),
    "woke_middle_of_night": ("Waking 1-3 AM suggests Liver qi stagnation. Tension held during the day surfaces at night.",
                             "Release tension before bed with stretching or journaling, and keep dinner light.", "priority"),
    "woke_early": ("Early waking can indicate yin deficiency. Your body runs out of cooling reserves before morning.",
                   "Nourishing foods and an earlier bedtime rebuild what the night needs.", "moderate"),
    "unrefreshing": ("Unrefreshing sleep often signals damp accumulation. Rest happens, but heaviness lingers.",
                     "Lighter dinners and gentle morning movement help clear the fog.", "moderate"),
}

EMOTION_SIGNAL_READINGS = {
    "irritable": ("Irritability signals Liver qi rising. Frustration builds when energy can't move.",
                  "Sour foods and stretching help. Release before it builds.", "priority"),
    "worried": ("Worry taxes the Spleen. Overthinking and digestion share the same resources.",
                "Ground yourself with warm, nourishing food and regular meals.", "moderate"),
    "anxious": ("Anxiety often roots in Kidney deficiency. The nervous system is running on thin reserves.",
                "Rest and warmth restore. Protect your evening.", "priority"),
    "sad": ("Grief affects the Lung. Heaviness in the chest and low energy often travel together.",
            "Deep breathing and white foods like pear and radish support.", "moderate"),
    "restless": ("Restlessness signals unsettled Shen. The spirit has nowhere to land.",
                 "Calming routines before bed and less stimulation after dinner.", "priority"),
    "overwhelmed": ("Overwhelm depletes Spleen and Kidney. There's more coming in than your reserves can hold.",
                    "Simplify and restore today. Fewer commitments, more nourishment.", "priority"),
}

THERMAL_MISMATCH_READINGS = {
    "cold": ("Feeling cold despite warm terrain suggests temporary yang depletion.",
             "Rest and warm drinks today."),
    "hot": ("Feeling hot despite cold terrain is often deficiency heat.",
            "Rest and hydrate. Avoid pushing harder to burn it off."),
}

THERMAL_READINGS = {
    "cold": ("Feeling cold today. Warmth protects your yang and your energy follows.",
             "Warm drinks and layered clothing protect your yang."),
    "hot": ("Feeling warm today. Extra heat burns through energy faster.",
            "Cool drinks and lighter activity help release excess heat."),
}

STOOL_SIGNAL_READINGS = {
    "loose": ("Loose stools suggest Spleen qi deficiency. Your digestion isn't holding what it takes in.",
              "Avoid cold and raw foods. Warm, cooked meals are easier to transform.", "priority"),
    "constipated": ("Constipation often indicates heat or yin deficiency. Fluids aren't reaching where they're needed.",
                    "More fluids and fiber. Moistening foods like pear and sesame help.", "priority"),
    "sticky": ("Sticky stools suggest dampness. Your digestion is working through heaviness.",
               "Reduce greasy foods and dairy. Light, warm meals help drain it.", "priority"),
    "mixed": ("Variable digestion suggests Liver-Spleen disharmony. Stress and digestion are talking to each other.",
              "Regular meals help. Keep meal times steady even when the day isn't.", "moderate"),
}

APPETITE_SIGNAL_READINGS = {
    "none": ("No appetite often signals Spleen qi stagnation.",
             "Warm, aromatic foods may help.", "moderate"),
    "low": ("Low appetite today. Your digestion is asking for gentleness.",
            "Focus on easily digestible, warm foods.", "moderate"),
    "strong": ("Strong appetite can indicate stomach heat.",
               "Favor cooling, moistening foods.", "moderate"),
}

SIGNAL_DISPLAY = {
    "hard_to_fall_asleep": "hard to fall asleep",
    "woke_middle_of_night": "woke in the middle of the night",
    "woke_early": "woke early",
    "unrefreshing": "unrefreshing sleep",
}


# ---------------------------------------------------------------------------
# Seasonality
# ---------------------------------------------------------------------------

SEASONAL_DEFAULT_ADVICE = "Eat seasonally, adjust routines to daylight, and listen to what your body asks for."
SEASONAL_DEFAULT_REASON = "Seasonal awareness supports balance"

WEATHER_REASONS = {
    "cold": "Cold weather today",
    "hot": "Hot weather today",
    "humid": "Humid conditions today",
    "rainy": "Humid conditions today",
    "dry": "Dry air today",
    "windy": "Windy conditions today",
}


# ---------------------------------------------------------------------------
# Modifier areas
# ---------------------------------------------------------------------------

INNER_CLIMATE_COLD = (
    "Your inner temperature runs cold. The digestive fire that transforms food into energy burns low. You feel it as fatigue, cold hands or sluggish mornings.",
    "Warm foods and drinks kindle the fire. Avoid ice and raw foods that extinguish what you're trying to build.",
    "Your quiz revealed cold-deficient patterns",
)
INNER_CLIMATE_HOT = (
    "Your inner temperature runs hot. Heat accumulates easily and shows up as restlessness, skin issues or difficulty cooling down at night.",
    "Cooling foods and calm activities bring the temperature down. Avoid spicy foods and late-night intensity.",
    "Your quiz revealed warm-excess patterns",
)
FLUID_DAMP = (
    "Your body holds onto fluid. Dampness is heavy: it shows up as sluggishness, foggy thinking or a thick tongue coating. Your digestion works harder to process moisture.",
    "Light, warm foods help drain what's stuck. Avoid dairy, sugar and greasy meals that add to the accumulation.",
    "Your responses indicate a damp pattern",
)
FLUID_DRY = (
    "Your body runs dry. Fluids don't replenish easily; you might notice dry skin, thirst that's hard to quench, or constipation.",
    "Moistening foods like pear, honey and soups nourish your fluids. Sip warm water throughout the day.",
    "Your responses indicate a dry pattern",
)
QI_STAGNATION_READING = (
    "Your energy tends to get stuck. When qi doesn't flow, it shows up as tension, frustration or feeling physically tight. Movement is medicine for your pattern.",
    "Physical activity, stretching and deep breathing help move what's stuck. Avoid prolonged sitting and suppressed emotions.",
    "Your responses indicate qi stagnation",
)
QI_BLOCKED_TODAY = (
    "Energy feels blocked today. Stiffness and stress are signals that qi wants to move but can't find a path.",
    "Even small movements help: a walk, some stretches or deep sighs release the pressure.",
)
QI_IRRITABLE_TODAY = (
    "Irritability today points to qi that wants to move but can't find a path.",
    "Stretching, a brisk walk and a few long exhales release the pressure.",
)


# ---------------------------------------------------------------------------
# Daily tone
# ---------------------------------------------------------------------------

DAILY_TONE_LABELS = {
    COLD_DEFICIENT: "Low Flame Day",
    COLD_BALANCED: "Cool Core Day",
    NEUTRAL_DEFICIENT: "Steady Build Day",
    NEUTRAL_BALANCED: "Balance Day",
    NEUTRAL_EXCESS: "Release Day",
    WARM_BALANCED: "High Flame Day",
    WARM_EXCESS: "Cool Down Day",
    WARM_DEFICIENT: "Nourish Day",
}

# Substring checks, first hit wins.
WEATHER_TONE_NOTES: list[tuple[tuple[str, ...], str]] = [
    (("dry", "clear"), "Dry air"),
    (("humid", "rain"), "Humid"),
    (("cold", "snow"), "Cold out"),
    (("hot", "heat"), "Hot out"),
    (("wind",), "Windy"),
]


# ---------------------------------------------------------------------------
# Seasonality rules: context exposes season, terrain_type and modifier
# ---------------------------------------------------------------------------

SEASONAL_RULES = [
    Rule(
        when=lambda c: c.season == "winter" and c.terrain_type in (COLD_DEFICIENT, COLD_BALANCED),
        then=("Winter amplifies your cold pattern. External cold meets internal cold, so your body works harder to maintain warmth.",
              "Extra warming practices are essential. Soups, layers and avoiding cold inputs protect your core.",
              "priority", "Winter challenges cold constitutions"),
        name="winter_cold",
    ),
    Rule(
        when=lambda c: c.season == "summer" and c.terrain_type in (WARM_EXCESS, WARM_BALANCED),
        then=("Summer intensifies your heat. External heat compounds internal heat; be proactive about cooling before symptoms appear.",
              "Cooling foods, hydration and avoiding midday heat help manage the double warmth.",
              "priority", "Summer challenges warm constitutions"),
        name="summer_warm",
    ),
    Rule(
        when=lambda c: c.season == "late_summer" and c.modifier == MODIFIER_DAMP,
        then=("Late summer is peak dampness season. Your damp pattern is most vulnerable now and the spleen needs extra support.",
              "Avoid dairy, sugar and heavy foods. Light movement and warm meals drain what accumulates.",
              "priority", "Late summer amplifies damp patterns"),
        name="late_summer_damp",
    ),
    Rule(
        when=lambda c: c.season == "autumn" and c.modifier == MODIFIER_DRY,
        then=("Autumn dryness meets your dry pattern. The air pulls moisture your body is already short on.",
              "Moistening foods are essential: pears, honey, soups. Sip warm water throughout the day.",
              "priority", "Autumn amplifies dry patterns"),
        name="autumn_dry",
    ),
    Rule(
        when=lambda c: c.season == "spring" and c.modifier == MODIFIER_STAGNATION,
        then=("Spring is the season of rising energy. Your stagnation pattern responds strongly, so movement matters more now.",
              "Increase stretching and walks. Express rather than hold. Spring wants energy to flow.",
              "moderate", "Spring activates stagnation patterns"),
        name="spring_stagnation",
    ),
]

# weather -> {terrain or modifier: focus floor}
WEATHER_SEASONAL_FOCUS = {
    "cold": {COLD_DEFICIENT: "priority", COLD_BALANCED: "moderate"},
    "hot": {WARM_EXCESS: "priority", WARM_BALANCED: "moderate"},
    "humid": {MODIFIER_DAMP: "priority"},
    "rainy": {MODIFIER_DAMP: "priority"},
    "dry": {MODIFIER_DRY: "priority"},
    "windy": {},
}


# ---------------------------------------------------------------------------
# Why-for-you rules: context exposes tags, terrain_type and modifier
# ---------------------------------------------------------------------------

COLD_PAIR = (COLD_DEFICIENT, COLD_BALANCED)
WARM_PAIR = (WARM_EXCESS, WARM_BALANCED)

ROUTINE_WHY_RULES = [
    Rule(lambda c: c.terrain_type in COLD_PAIR and "warming" in c.tags,
         "Warming routines kindle your digestive fire and build the heat your body needs to function at its best."),
    Rule(lambda c: c.terrain_type in WARM_PAIR and "cooling" in c.tags,
         "Cooling routines bring your natural heat back to a manageable level, protecting your sleep and skin."),
    Rule(lambda c: c.terrain_type == NEUTRAL_EXCESS and "moves_qi" in c.tags,
         "Moving stuck qi prevents the tension and restlessness your type is prone to."),
    Rule(lambda c: c.terrain_type == WARM_DEFICIENT and "calms_shen" in c.tags,
         "Calming routines let your nervous system rest, which is how your depleted reserves rebuild."),
    Rule(lambda c: c.modifier == MODIFIER_SHEN and "calms_shen" in c.tags,
         "Your shen modifier means your mind is more active than most. Calming practices settle the spirit for better sleep and clarity."),
    Rule(lambda c: c.modifier == MODIFIER_STAGNATION and "moves_qi" in c.tags,
         "Stagnation means energy gets stuck easily. This routine helps get things flowing again."),
    Rule(lambda c: c.modifier == MODIFIER_DAMP and "dries_damp" in c.tags,
         "Your damp modifier means excess moisture accumulates. This routine helps your body process and drain what's stuck."),
]

# Within a terrain group the first matching tag wins, so the order of the
# warming/cooling pairs matters.
INGREDIENT_WHY_RULES = [
    Rule(lambda c: c.terrain_type in COLD_PAIR and "warming" in c.tags,
         "Warming ingredients directly support your cold pattern by building internal heat."),
    Rule(lambda c: c.terrain_type in COLD_PAIR and "cooling" in c.tags,
         "Use sparingly. Cooling ingredients can weaken your digestive fire."),
    Rule(lambda c: c.terrain_type in WARM_PAIR and "cooling" in c.tags,
         "Cooling ingredients are your allies. They balance your natural heat without shocking your system."),
    Rule(lambda c: c.terrain_type in WARM_PAIR and "warming" in c.tags,
         "Be careful: warming ingredients add heat to a system that's already warm."),
    Rule(lambda c: c.terrain_type == WARM_DEFICIENT and "moistens_dryness" in c.tags,
         "Your warmth dries you out. Moistening ingredients replenish the fluids your body needs."),
    Rule(lambda c: c.terrain_type == NEUTRAL_DEFICIENT and "supports_deficiency" in c.tags,
         "Your body needs building up. This ingredient gently nourishes without taxing your digestion."),
    Rule(lambda c: c.modifier == MODIFIER_SHEN and "calms_shen" in c.tags,
         "Your shen modifier means your mind benefits especially from calming ingredients."),
    Rule(lambda c: c.modifier == MODIFIER_DAMP and "dries_damp" in c.tags,
         "Your damp modifier makes this ingredient particularly helpful. It supports drainage of excess moisture."),
]
