# src/switchbuddy/rewards/catalog.py

from __future__ import annotations

from .reward_models import Reward, RewardCategory


def _r(id: int, name: str, description: str, cost: float, icon: str) -> Reward:
    return Reward(id=id, name=name, description=description, cost=cost, icon=icon)


REWARD_CATEGORIES: tuple[RewardCategory, ...] = (
    RewardCategory(
        title="25 Coins - Quick Wins",
        description="Encourages consistency with tiny but rewarding breaks.",
        color="#22c55e",
        rewards=(
            _r(1, "Mindful Break", "Take a 10-min mindful break (no screens).", 25, "🧠"),
            _r(2, "Favorite Song", "Listen to your favorite song guilt-free.", 25, "🎵"),
            _r(3, "Funny Video", "Watch a funny short video.", 25, "😂"),
            _r(4, "Gratitude Moment", "Write 3 things you're grateful for today.", 25, "🙏"),
            _r(5, "Snack Time", "Drink your favorite coffee/tea/snack.", 25, "☕"),
            _r(6, "Thank You Text", "Send a thank-you text to a friend.", 25, "📱"),
            _r(7, "Desk Stretch", "5-min desk exercise/stretch.", 25, "💪"),
            _r(8, "Fresh Air", "Step outside for fresh air.", 25, "🌿"),
            _r(9, "Meme Scroll", "Scroll memes guilt-free for 5 mins.", 25, "🤪"),
            _r(10, "Declutter One Item", "Declutter 1 small item from your desk.", 25, "✨"),
        ),
    ),
    RewardCategory(
        title="50 Coins - Medium Boost",
        description="Rewards that make you smarter or happier in short bursts.",
        color="#f59e0b",
        rewards=(
            _r(11, "TED Talk", "Watch a TED Talk / motivational video.", 50, "🎤"),
            _r(12, "Brain Game", "Play a 10-min brain game (chess, sudoku, puzzle).", 50, "🧩"),
            _r(13, "Read a Book", "Read 5 pages of a book.", 50, "📖"),
            _r(14, "Power Nap", "Take a power nap (20 min).", 50, "😴"),
            _r(15, "Journal Wins", "Journal your day's wins.", 50, "🏆"),
            _r(16, "Quick Doodle", "Draw/sketch something random.", 50, "🎨"),
            _r(17, "Breathing Technique", "Try a new breathing technique.", 50, "😮‍💨"),
            _r(18, "Plan Tomorrow", "Plan tomorrow in a mini-list.", 50, "📝"),
            _r(19, "Fun Fact Quiz", "Try a fun fact quiz.", 50, "🤔"),
            _r(20, "Speed Typing", "Practice 5 min of speed typing.", 50, "⌨️"),
        ),
    ),
    RewardCategory(
        title="75 Coins - Big Engagement",
        description="Rewards that feel more significant, mixing fun + relationships.",
        color="#f97316",
        rewards=(
            _r(21, "Friend/Family Call", "Schedule 30 min family/friend call.", 75, "📞"),
            _r(22, "Watch an Episode", "Watch an episode of your favorite series guilt-free.", 75, "📺"),
            _r(23, "Try a New Recipe", "Try a new recipe/snack at home.", 75, "👨‍🍳"),
            _r(24, "Online Game", "Play an online multiplayer game.", 75, "🎮"),
            _r(25, "Hobby Time", "Spend 30 min on your hobby (music, art, etc.).", 75, "❤️"),
            _r(26, "Vision Board Update", "Do a vision board update (goals visualization).", 75, "🎯"),
            _r(27, "Share Learnings", "Write a small blog / post to share your learnings.", 75, "✍️"),
            _r(28, "Solo Walk", "Take yourself on a solo walk with music.", 75, "🚶"),
            _r(29, "Workout Challenge", "Try a new workout challenge.", 75, "🏋️"),
            _r(30, "Screen-Free Dinner", "Have a screen-free dinner with family.", 75, "🍽️"),
        ),
    ),
    RewardCategory(
        title="100 Coins - Premium Experiences",
        description="Powerful non-monetary rewards that feel premium but cost nothing.",
        color="#ef4444",
        rewards=(
            _r(31, "Movie Night", "Movie night (solo/family).", 100, "🎬"),
            _r(32, "Weekend Half-Day Off", "Block calendar for a half-day off guilt-free.", 100, "🗓️"),
            _r(33, "Digital Detox", "Try a full digital detox for 2 hrs.", 100, "🔕"),
            _r(34, "Letter to Future Self", "Write a personal letter to your future self.", 100, "✉️"),
            _r(35, "Plan a Trip", "Plan your next short trip/outdoor activity.", 100, "✈️"),
            _r(36, "Home Spa Session", "Do a home spa session (candles, music, relaxation).", 100, "🛀"),
            _r(37, "Explore a Course", "Explore a new free online course/tutorial.", 100, "🎓"),
            _r(38, "Gratitude Journal", "Create a gratitude video/journal for your week.", 100, "📔"),
            _r(39, "Fun Challenge", "Do a fun challenge (e.g., 24-hr no sugar/junk).", 100, "🥇"),
            _r(40, "Quality Time", "Spend quality time (1 hr) with family without distractions.", 100, "👨‍👩‍👧‍👦"),
        ),
    ),
)


def all_rewards() -> list[Reward]:
    return [r for c in REWARD_CATEGORIES for r in c.rewards]


def find_reward(reward_id: int) -> Reward | None:
    for r in all_rewards():
        if r.id == reward_id:
            return r
    return None
