from enum import StrEnum


class TicketTab(StrEnum):
    ADMISSION = 'admission'
    ADDONS = 'addons'
    PROMOTIONS = 'promotions'
    HOLDS = 'holds'
    SETTINGS = 'settings'
