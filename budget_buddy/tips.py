"""Rotating money tips shown on the dashboard."""

from __future__ import annotations

from datetime import date
from typing import Optional

FINANCIAL_TIPS = [
    "Save 10 a day, and you'll have 300 in a month. That's a new game or a nice meal!",
    "Carry your own water bottle. You could save up to 30 a week on buying drinks outside.",
    "Track your small spends. That 20 chai every day adds up to 600 a month!",
    "Challenge yourself with a 'No-Spend Day' once a week. It's a fun way to save.",
    "Your future self will thank you for the money you save today. Think long-term!",
    "Fun is important, but make sure you budget for it so you don't overspend.",
    "Saving 50 a week is 2,600 in a year! Small amounts grow bigger than you think.",
    "Don't spend money you don't have, not even in your mind. Avoid impulse buys.",
    "Take 5 minutes every Sunday to review your expenses. It helps you stay aware and in control.",
    "An emergency fund isn't for shopping; it's for peace of mind when unexpected things happen.",
    "Before buying online, leave items in your cart for a day. Do you still want it tomorrow?",
    "Student discounts are your best friend! Always ask if a place offers one.",
    "Tell 'needs' (like a bus pass) apart from 'wants' (like the latest sneakers).",
    "Learn to say 'no' to plans that don't fit your budget. Your friends will understand.",
    "Borrowing books from a library instead of buying them is an easy way to save money.",
    "Cook at home or pack lunch. It's much cheaper and often healthier than eating out.",
    "Sell things you don't use anymore. Old books, clothes, or games can become extra cash.",
    "Unsubscribe from marketing emails to reduce the temptation to shop.",
    "Set specific saving goals. 'Saving 500 for headphones' is better than just 'saving'.",
    "Pay with cash instead of a card. It feels more real and makes you think twice before spending.",
    "Repairing something is often cheaper than replacing it. Fix that torn shirt or broken gadget!",
    "Look for free entertainment options like parks, community events, or learning a new skill online.",
    "When you get gift money, save at least half of it immediately.",
    "Automate your savings. Ask your parents to help you set aside a fixed amount every month.",
    "Talk about money with your parents or a trusted adult. Their experience can be a great guide.",
    "Check your balance regularly to stay on top of your finances.",
    "Avoid late fees on bills by paying them on time. It's like throwing money away!",
]


def daily_tip(today: Optional[date] = None) -> str:
    """The tip for ``today``; changes once per day of the year."""
    day_of_year = (today or date.today()).timetuple().tm_yday
    return FINANCIAL_TIPS[day_of_year % len(FINANCIAL_TIPS)]
