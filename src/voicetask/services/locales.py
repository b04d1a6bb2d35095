"""Locale profiles for the voice-command interpreter.

Each supported spoken locale has one ``LocaleProfile`` holding the phrase sets
every pipeline stage matches against: relative-day words, weekday names,
priority keywords, note triggers, location markers, time markers and
time-of-day words.

A category set to ``None`` inherits the default (en-US) profile. The table is
built once at import time and never mutated.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, fields
from enum import Enum
from functools import lru_cache

from voicetask.config import settings

logger = logging.getLogger(__name__)

AUTO_LOCALE = "Auto"
DEFAULT_LOCALE = "en-US"


class DayPeriod(str, Enum):
    """Hour adjustment implied by a time-of-day word."""

    AM = "am"  # 12 -> 0
    PM = "pm"  # +12 below noon
    NIGHT = "night"  # 12 -> 0, +12 below noon
    NOON = "noon"  # +12 below the configured cutoff ("2 siang" -> 14:00)


@dataclass(frozen=True)
class OffsetRule:
    """A relative-offset phrase ("in 5 minutes", "2 jam lagi").

    ``pattern`` is a regex with at most one group holding the amount. When the
    phrase carries no number ("half an hour"), ``amount`` is used instead.
    """

    pattern: str
    unit: str  # "minutes", "hours" or "days"
    amount: int | None = None


@dataclass(frozen=True)
class LocaleProfile:
    locale_id: str
    flag: str
    name: str
    example: str

    tomorrow: tuple[str, ...] | None = None
    day_after_tomorrow: tuple[str, ...] | None = None
    next_week: tuple[str, ...] | None = None
    weekdays: tuple[tuple[str, int], ...] | None = None  # name -> ISO weekday
    next_weekday: tuple[str, ...] | None = None  # templates with "{day}"
    day_of_month: tuple[str, ...] | None = None  # regexes, one day group
    offsets: tuple[OffsetRule, ...] | None = None

    priority_keywords: tuple[str, ...] | None = None

    note_triggers: tuple[str, ...] | None = None
    note_separators: tuple[str, ...] | None = None
    command_prefixes: tuple[str, ...] | None = None

    location_prefixes: tuple[str, ...] | None = None
    location_suffixes: tuple[str, ...] | None = None
    location_articles: tuple[str, ...] | None = None
    non_location_words: tuple[str, ...] | None = None
    location_stop_words: tuple[str, ...] | None = None

    time_markers: tuple[str, ...] | None = None
    time_units: tuple[str, ...] | None = None
    day_periods: tuple[tuple[str, DayPeriod], ...] | None = None

    @property
    def language(self) -> str:
        return self.locale_id.split("-")[0].lower()


_IDENTITY_FIELDS = frozenset(["locale_id", "flag", "name", "example"])

CATEGORIES: tuple[str, ...] = tuple(
    f.name for f in fields(LocaleProfile) if f.name not in _IDENTITY_FIELDS
)

# Keyed categories: (phrase, value) pairs, deduplicated by phrase
_PAIR_CATEGORIES = frozenset(["weekdays", "day_periods"])

# Categories the default profile may leave empty: English marks places with
# prefixes only, so it has no suffix particles to offer as a fallback
OPTIONAL_DEFAULT_CATEGORIES = frozenset(["location_suffixes"])

_AM, _PM, _NIGHT, _NOON = DayPeriod.AM, DayPeriod.PM, DayPeriod.NIGHT, DayPeriod.NOON


def _week(*names: str) -> tuple[tuple[str, int], ...]:
    """Map seven weekday names (Monday first) to ISO weekday numbers.

    A slot may hold several spellings separated by ``|``.
    """
    pairs = []
    for iso, slot in enumerate(names, start=1):
        for name in slot.split("|"):
            pairs.append((name, iso))
    return tuple(pairs)


EN_US = LocaleProfile(
    locale_id="en-US",
    flag="🇺🇸",
    name="English (US)",
    example="Meeting tomorrow at 3pm",
    tomorrow=("tomorrow",),
    day_after_tomorrow=("the day after tomorrow", "day after tomorrow"),
    next_week=("next week",),
    weekdays=_week("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"),
    next_weekday=("next {day}", "this coming {day}"),
    day_of_month=(r"(?<!\w)(?:on )?the (\d{1,2})(?:st|nd|rd|th)(?!\w)",),
    offsets=(
        OffsetRule(r"(?<!\w)in (?:half an|a half) hour(?!\w)", "minutes", 30),
        OffsetRule(r"(?<!\w)half an? hour(?!\w)", "minutes", 30),
        OffsetRule(r"(?<!\w)in (\d+)\s*(?:minutes?|mins?)(?!\w)", "minutes"),
        OffsetRule(r"(?<!\w)in (\d+)\s*(?:hours?|hrs?)(?!\w)", "hours"),
        OffsetRule(r"(?<!\w)in an hour(?!\w)", "hours", 1),
        OffsetRule(r"(?<!\w)in (\d+)\s*days?(?!\w)", "days"),
    ),
    priority_keywords=("urgent", "important", "high priority", "asap"),
    note_triggers=("don't forget", "don’t forget", "dont forget", "do not forget", "remember to"),
    note_separators=("notes", "note"),
    command_prefixes=(
        "create task", "create a task", "add task", "add a task", "new task",
        "remind me to", "remind me", "please",
    ),
    location_prefixes=("at", "in"),
    location_suffixes=(),
    location_articles=("the", "a", "an"),
    non_location_words=(
        "this", "that", "what", "which", "here", "there", "home", "with",
        "least", "all", "case", "order", "time",
        "morning", "afternoon", "evening", "night", "noon", "tonight",
    ),
    location_stop_words=(
        "today", "tonight", "next", "on", "and", "to", "for", "with", "by",
        "before", "after", "about",
    ),
    time_markers=("at", "around", "by"),
    time_units=("o'clock", "oclock"),
    day_periods=(
        ("am", _AM), ("a.m.", _AM), ("in the morning", _AM),
        ("pm", _PM), ("p.m.", _PM), ("in the afternoon", _PM), ("in the evening", _PM),
        ("at night", _NIGHT), ("tonight", _NIGHT), ("night", _NIGHT),
    ),
)

EN_GB = LocaleProfile(
    locale_id="en-GB",
    flag="🇬🇧",
    name="English (UK)",
    example="Meeting tomorrow at 15:00",
)

ID_ID = LocaleProfile(
    locale_id="id-ID",
    flag="🇮🇩",
    name="Indonesia",
    example="Rapat besok jam 3 sore",
    tomorrow=("besok",),
    day_after_tomorrow=("lusa",),
    next_week=("minggu depan",),
    weekdays=_week("senin", "selasa", "rabu", "kamis", "jumat|jum'at", "sabtu", "minggu"),
    next_weekday=("{day} depan", "hari {day} depan"),
    day_of_month=(r"(?<!\w)tanggal (\d{1,2})(?!\d)", r"(?<!\w)tgl\.? ?(\d{1,2})(?!\d)"),
    offsets=(
        OffsetRule(r"(?<!\w)setengah\s*jam\s*lagi(?!\w)", "minutes", 30),
        OffsetRule(r"(\d+)\s*menit\s*lagi(?!\w)", "minutes"),
        OffsetRule(r"(\d+)\s*jam\s*lagi(?!\w)", "hours"),
        OffsetRule(r"(\d+)\s*hari\s*lagi(?!\w)", "days"),
    ),
    priority_keywords=("penting", "mendesak"),
    note_triggers=("jangan lupa", "jgn lupa", "ingat untuk"),
    note_separators=("dengan catatan", "catatan", "keterangan"),
    command_prefixes=(
        "tambah tugas", "buat tugas", "ingatkan saya untuk", "ingatkan saya", "ingatkan",
        "besok saya ada", "besok ada", "besok saya punya",
        "saya ada", "saya punya", "ada",
        "aku mau", "aku ingin", "tolong", "tolong buatkan", "tolong ingatkan", "tolong catat",
        "saya mau", "saya ingin",
    ),
    location_prefixes=("di", "ke"),
    location_suffixes=None,
    location_articles=None,
    non_location_words=(
        "sini", "situ", "sana", "mana", "rumah", "pagi", "siang", "sore", "malam",
        "besok", "lusa",
    ),
    location_stop_words=(
        "hari", "untuk", "dan", "dengan", "sama", "yang", "nanti", "sekarang",
    ),
    time_markers=("jam", "pukul"),
    time_units=("wib", "wita", "wit"),
    day_periods=(("pagi", _AM), ("siang", _NOON), ("sore", _PM), ("malam", _NIGHT)),
)

MS_MY = LocaleProfile(
    locale_id="ms-MY",
    flag="🇲🇾",
    name="Bahasa Melayu",
    example="Mesyuarat esok pukul 3 petang",
    tomorrow=("esok", "besok"),
    day_after_tomorrow=("lusa",),
    next_week=("minggu depan", "minggu hadapan"),
    weekdays=_week("isnin", "selasa", "rabu", "khamis", "jumaat", "sabtu", "ahad"),
    next_weekday=("{day} depan", "{day} hadapan"),
    day_of_month=(r"(?<!\w)haribulan (\d{1,2})(?!\d)", r"(?<!\w)tarikh (\d{1,2})(?!\d)"),
    offsets=(
        OffsetRule(r"(?<!\w)setengah\s*jam\s*lagi(?!\w)", "minutes", 30),
        OffsetRule(r"(\d+)\s*minit\s*lagi(?!\w)", "minutes"),
        OffsetRule(r"(\d+)\s*jam\s*lagi(?!\w)", "hours"),
    ),
    priority_keywords=("penting", "segera", "mustahak"),
    note_triggers=("jangan lupa", "ingat untuk"),
    note_separators=("catatan", "nota"),
    command_prefixes=("ingatkan saya untuk", "tambah tugasan", "buat tugasan"),
    location_prefixes=("di", "ke"),
    non_location_words=("sini", "situ", "sana", "mana", "rumah", "pagi", "petang", "malam"),
    location_stop_words=("untuk", "dan", "dengan", "hari"),
    time_markers=("pukul", "jam"),
    day_periods=(
        ("pagi", _AM), ("tengah hari", _NOON), ("petang", _PM), ("malam", _NIGHT),
    ),
)

JA_JP = LocaleProfile(
    locale_id="ja-JP",
    flag="🇯🇵",
    name="日本語",
    example="明日午後3時に会議",
    tomorrow=("明日", "あした", "あす"),
    day_after_tomorrow=("明後日", "あさって"),
    next_week=("来週",),
    weekdays=_week(
        "月曜日|月曜", "火曜日|火曜", "水曜日|水曜", "木曜日|木曜",
        "金曜日|金曜", "土曜日|土曜", "日曜日|日曜",
    ),
    next_weekday=("次の{day}", "今度の{day}"),
    day_of_month=(r"(?<!\d)(\d{1,2})日(?!後|間)",),
    offsets=(
        OffsetRule(r"(\d+)\s*分後", "minutes"),
        OffsetRule(r"(\d+)\s*時間後", "hours"),
        OffsetRule(r"(\d+)\s*日後", "days"),
    ),
    priority_keywords=("緊急", "至急", "重要", "急ぎ"),
    note_triggers=("忘れずに",),
    note_separators=("メモ", "備考"),
    command_prefixes=("タスクを作成", "タスク追加", "リマインド"),
    location_suffixes=("で", "に"),
    non_location_words=(
        "明日", "昨日", "今日", "明後日", "来週", "何", "誰", "私", "僕", "俺",
        "午前", "午後", "朝", "夜", "夕方", "時",
    ),
    day_periods=(
        ("午前", _AM), ("朝", _AM), ("深夜", _AM),
        ("午後", _PM), ("夕方", _PM), ("夜", _PM),
    ),
)

KO_KR = LocaleProfile(
    locale_id="ko-KR",
    flag="🇰🇷",
    name="한국어",
    example="내일 오후 3시 회의",
    tomorrow=("내일",),
    day_after_tomorrow=("모레",),
    next_week=("다음 주", "다음주"),
    weekdays=_week("월요일", "화요일", "수요일", "목요일", "금요일", "토요일", "일요일"),
    next_weekday=("다음 {day}",),
    day_of_month=(r"(?<!\d)(\d{1,2})일(?!\s*(?:후|뒤))",),
    offsets=(
        OffsetRule(r"(\d+)\s*분\s*(?:후|뒤)", "minutes"),
        OffsetRule(r"(\d+)\s*시간\s*(?:후|뒤)", "hours"),
        OffsetRule(r"(\d+)\s*일\s*(?:후|뒤)", "days"),
    ),
    priority_keywords=("긴급", "중요", "급한"),
    note_triggers=("잊지 말고",),
    note_separators=("메모",),
    command_prefixes=("할 일 추가", "알림 설정"),
    location_suffixes=("에서", "에"),
    non_location_words=(
        "내일", "오늘", "지금", "모레", "어디", "여기", "거기", "오전", "오후", "저녁", "아침",
    ),
    day_periods=(
        ("오전", _AM), ("아침", _AM), ("새벽", _AM),
        ("오후", _PM), ("저녁", _PM), ("밤", _PM),
    ),
)

ZH_CN = LocaleProfile(
    locale_id="zh-CN",
    flag="🇨🇳",
    name="中文 (简体)",
    example="明天下午3点开会",
    tomorrow=("明天",),
    day_after_tomorrow=("后天",),
    next_week=("下周", "下星期"),
    weekdays=_week(
        "星期一|周一", "星期二|周二", "星期三|周三", "星期四|周四",
        "星期五|周五", "星期六|周六", "星期日|星期天|周日",
    ),
    next_weekday=("下个{day}",),
    day_of_month=(r"(?<!\d)(\d{1,2})[号日]",),
    offsets=(
        OffsetRule(r"半小时后", "minutes", 30),
        OffsetRule(r"(\d+)\s*分钟后", "minutes"),
        OffsetRule(r"(\d+)\s*个?小时后", "hours"),
        OffsetRule(r"(\d+)\s*天后", "days"),
    ),
    priority_keywords=("紧急", "重要"),
    note_triggers=("别忘了", "不要忘记", "记得"),
    note_separators=("备注",),
    command_prefixes=("创建任务", "添加任务", "提醒我"),
    day_periods=(
        ("上午", _AM), ("早上", _AM), ("凌晨", _AM),
        ("下午", _PM), ("晚上", _PM), ("中午", _PM),
    ),
)

ZH_TW = LocaleProfile(
    locale_id="zh-TW",
    flag="🇹🇼",
    name="中文 (繁體)",
    example="明天下午3點開會",
    tomorrow=("明天",),
    day_after_tomorrow=("後天",),
    next_week=("下週", "下星期"),
    weekdays=_week(
        "星期一|週一", "星期二|週二", "星期三|週三", "星期四|週四",
        "星期五|週五", "星期六|週六", "星期日|星期天|週日",
    ),
    next_weekday=("下個{day}",),
    day_of_month=(r"(?<!\d)(\d{1,2})[號日]",),
    offsets=(
        OffsetRule(r"半小時後", "minutes", 30),
        OffsetRule(r"(\d+)\s*分鐘後", "minutes"),
        OffsetRule(r"(\d+)\s*個?小時後", "hours"),
        OffsetRule(r"(\d+)\s*天後", "days"),
    ),
    priority_keywords=("緊急", "重要"),
    note_triggers=("別忘了", "不要忘記", "記得"),
    note_separators=("備註",),
    command_prefixes=("建立任務", "新增任務", "提醒我"),
    day_periods=(
        ("上午", _AM), ("早上", _AM), ("凌晨", _AM),
        ("下午", _PM), ("晚上", _PM), ("中午", _PM),
    ),
)

ES_ES = LocaleProfile(
    locale_id="es-ES",
    flag="🇪🇸",
    name="Español",
    example="Reunión mañana a las 3pm",
    tomorrow=("mañana",),
    day_after_tomorrow=("pasado mañana",),
    next_week=("la próxima semana", "la semana que viene", "próxima semana"),
    weekdays=_week(
        "lunes", "martes", "miércoles|miercoles", "jueves", "viernes",
        "sábado|sabado", "domingo",
    ),
    next_weekday=("el próximo {day}", "próximo {day}", "el {day} que viene"),
    day_of_month=(r"(?<!\w)el día (\d{1,2})(?!\d)",),
    offsets=(
        OffsetRule(r"(?<!\w)en media hora(?!\w)", "minutes", 30),
        OffsetRule(r"(?<!\w)en (\d+) minutos?(?!\w)", "minutes"),
        OffsetRule(r"(?<!\w)en (\d+) horas?(?!\w)", "hours"),
    ),
    priority_keywords=("urgente", "importante"),
    note_triggers=("no te olvides de", "no olvides", "recuerda"),
    note_separators=("notas", "nota"),
    command_prefixes=("nueva tarea", "crear tarea", "recuérdame", "recuerdame"),
    location_prefixes=("en",),
    location_articles=("el", "la", "los", "las", "un", "una"),
    non_location_words=("casa", "este", "esta", "ese", "esa", "aquí", "allí"),
    location_stop_words=("hoy", "para", "con", "y", "por"),
    time_markers=("a las", "a la"),
    time_units=("horas", "hrs"),
    day_periods=(
        ("de la mañana", _AM), ("madrugada", _AM),
        ("de la tarde", _PM), ("tarde", _PM),
        ("de la noche", _NIGHT), ("noche", _NIGHT),
    ),
)

FR_FR = LocaleProfile(
    locale_id="fr-FR",
    flag="🇫🇷",
    name="Français",
    example="Réunion demain à 15h",
    tomorrow=("demain",),
    day_after_tomorrow=("après-demain", "après demain"),
    next_week=("la semaine prochaine", "semaine prochaine"),
    weekdays=_week("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"),
    next_weekday=("{day} prochain",),
    offsets=(
        OffsetRule(r"(?<!\w)dans une demi-heure(?!\w)", "minutes", 30),
        OffsetRule(r"(?<!\w)dans (\d+) minutes?(?!\w)", "minutes"),
        OffsetRule(r"(?<!\w)dans (\d+) heures?(?!\w)", "hours"),
    ),
    priority_keywords=("urgent", "important", "prioritaire"),
    note_triggers=("n'oublie pas de", "n'oublie pas", "noublie pas"),
    note_separators=("remarque",),
    command_prefixes=("rappelle-moi de", "nouvelle tâche", "créer une tâche"),
    location_prefixes=("à", "dans", "chez", "au"),
    location_articles=("le", "la", "les", "l'", "un", "une"),
    non_location_words=("moi", "toi", "ce", "cette", "quoi"),
    location_stop_words=("aujourd'hui", "pour", "avec", "et"),
    time_markers=("à", "vers"),
    time_units=("heures", "heure", "h"),
    day_periods=(
        ("du matin", _AM), ("de l'après-midi", _PM), ("du soir", _PM), ("de la nuit", _NIGHT),
    ),
)

DE_DE = LocaleProfile(
    locale_id="de-DE",
    flag="🇩🇪",
    name="Deutsch",
    example="Meeting morgen um 15 Uhr",
    tomorrow=("morgen",),
    day_after_tomorrow=("übermorgen",),
    next_week=("nächste woche", "kommende woche"),
    weekdays=_week("montag", "dienstag", "mittwoch", "donnerstag", "freitag", "samstag", "sonntag"),
    next_weekday=("nächsten {day}", "nächster {day}", "kommenden {day}"),
    offsets=(
        OffsetRule(r"(?<!\w)in einer halben stunde(?!\w)", "minutes", 30),
        OffsetRule(r"(?<!\w)in (\d+) minuten(?!\w)", "minutes"),
        OffsetRule(r"(?<!\w)in (\d+) stunden?(?!\w)", "hours"),
    ),
    priority_keywords=("dringend", "wichtig"),
    note_triggers=("nicht vergessen", "vergiss nicht", "denk daran"),
    note_separators=("notizen", "notiz", "anmerkung"),
    command_prefixes=("erinnere mich an", "erinnere mich", "neue aufgabe"),
    location_prefixes=("bei", "im", "in"),
    location_articles=("der", "die", "das", "dem", "den"),
    non_location_words=("mir", "dir", "hause"),
    location_stop_words=("heute", "und", "mit", "für"),
    time_markers=("um",),
    time_units=("uhr",),
    day_periods=(
        ("morgens", _AM), ("früh", _AM), ("vormittags", _AM),
        ("nachmittags", _PM), ("abends", _PM), ("nachts", _NIGHT),
    ),
)

PT_BR = LocaleProfile(
    locale_id="pt-BR",
    flag="🇧🇷",
    name="Português",
    example="Reunião amanhã às 15h",
    tomorrow=("amanhã", "amanha"),
    day_after_tomorrow=("depois de amanhã", "depois de amanha"),
    next_week=("semana que vem", "próxima semana", "proxima semana"),
    weekdays=_week(
        "segunda-feira|segunda", "terça-feira|terça|terca", "quarta-feira|quarta",
        "quinta-feira|quinta", "sexta-feira|sexta", "sábado|sabado", "domingo",
    ),
    next_weekday=("próxima {day}", "proxima {day}", "próximo {day}", "{day} que vem"),
    offsets=(
        OffsetRule(r"(?<!\w)em meia hora(?!\w)", "minutes", 30),
        OffsetRule(r"(?<!\w)(?:em|daqui a) (\d+) minutos?(?!\w)", "minutes"),
        OffsetRule(r"(?<!\w)(?:em|daqui a) (\d+) horas?(?!\w)", "hours"),
    ),
    priority_keywords=("urgente", "importante"),
    note_triggers=("não esqueça de", "não esquece de", "não esqueça", "lembre de"),
    note_separators=("notas", "observação"),
    command_prefixes=("nova tarefa", "criar tarefa", "me lembre de", "lembre-me de"),
    location_prefixes=("em",),
    location_articles=("o", "a", "os", "as"),
    non_location_words=("casa",),
    location_stop_words=("hoje", "para", "com", "e"),
    time_markers=("às",),
    time_units=("horas", "h"),
    day_periods=(
        ("da manhã", _AM), ("manhã", _AM),
        ("da tarde", _PM), ("tarde", _PM),
        ("da noite", _NIGHT), ("noite", _NIGHT),
    ),
)

IT_IT = LocaleProfile(
    locale_id="it-IT",
    flag="🇮🇹",
    name="Italiano",
    example="Riunione domani alle 15",
    tomorrow=("domani",),
    day_after_tomorrow=("dopodomani",),
    next_week=("la prossima settimana", "prossima settimana", "settimana prossima"),
    weekdays=_week(
        "lunedì|lunedi", "martedì|martedi", "mercoledì|mercoledi", "giovedì|giovedi",
        "venerdì|venerdi", "sabato", "domenica",
    ),
    next_weekday=("{day} prossimo", "prossimo {day}", "{day} prossima", "prossima {day}"),
    offsets=(
        OffsetRule(r"(?<!\w)(?:tra|fra) mezz'ora(?!\w)", "minutes", 30),
        OffsetRule(r"(?<!\w)(?:tra|fra) (\d+) minuti(?!\w)", "minutes"),
        OffsetRule(r"(?<!\w)(?:tra|fra) (\d+) ore(?!\w)", "hours"),
    ),
    priority_keywords=("urgente", "importante"),
    note_triggers=("non dimenticare di", "non dimenticare", "ricordati di"),
    note_separators=("nota",),
    command_prefixes=("ricordami di", "nuova attività"),
    location_prefixes=("in", "presso"),
    location_articles=("il", "lo", "la", "i", "gli", "le", "l'"),
    non_location_words=("casa",),
    location_stop_words=("oggi", "per", "con", "e"),
    time_markers=("alle ore", "alle", "verso le"),
    day_periods=(
        ("di mattina", _AM), ("del mattino", _AM),
        ("di pomeriggio", _PM), ("del pomeriggio", _PM), ("di sera", _PM),
        ("di notte", _NIGHT),
    ),
)

RU_RU = LocaleProfile(
    locale_id="ru-RU",
    flag="🇷🇺",
    name="Русский",
    example="Встреча завтра в 15:00",
    tomorrow=("завтра",),
    day_after_tomorrow=("послезавтра",),
    next_week=("на следующей неделе", "следующая неделя"),
    weekdays=_week(
        "понедельник", "вторник", "среда|среду", "четверг",
        "пятница|пятницу", "суббота|субботу", "воскресенье",
    ),
    next_weekday=("в следующий {day}", "в следующую {day}", "следующий {day}", "следующую {day}"),
    offsets=(
        OffsetRule(r"(?<!\w)через полчаса(?!\w)", "minutes", 30),
        OffsetRule(r"(?<!\w)через час(?!\w)", "hours", 1),
        OffsetRule(r"(?<!\w)через (\d+) минут\w*", "minutes"),
        OffsetRule(r"(?<!\w)через (\d+) час\w*", "hours"),
        OffsetRule(r"(?<!\w)через (\d+) (?:день|дня|дней)(?!\w)", "days"),
    ),
    priority_keywords=("срочно", "важно"),
    note_triggers=("не забудь",),
    note_separators=("заметка", "примечание"),
    command_prefixes=("напомни мне", "создай задачу", "новая задача"),
    location_prefixes=("в", "во"),
    non_location_words=("меня", "тебя"),
    location_stop_words=("сегодня", "и", "с", "для"),
    time_markers=("в",),
    time_units=("часов", "часа", "ч"),
    day_periods=(("утра", _AM), ("дня", _PM), ("вечера", _PM), ("ночи", _NIGHT)),
)

TR_TR = LocaleProfile(
    locale_id="tr-TR",
    flag="🇹🇷",
    name="Türkçe",
    example="Yarın saat 15'te toplantı",
    tomorrow=("yarın", "yarin"),
    day_after_tomorrow=("öbür gün", "yarından sonra"),
    next_week=("gelecek hafta", "önümüzdeki hafta", "haftaya"),
    weekdays=_week(
        "pazartesi", "salı|sali", "çarşamba|carsamba", "perşembe|persembe",
        "cuma", "cumartesi", "pazar",
    ),
    next_weekday=("gelecek {day}", "önümüzdeki {day}"),
    offsets=(
        OffsetRule(r"(?<!\w)yarım saat sonra(?!\w)", "minutes", 30),
        OffsetRule(r"(\d+)\s*dakika sonra(?!\w)", "minutes"),
        OffsetRule(r"(\d+)\s*saat sonra(?!\w)", "hours"),
    ),
    priority_keywords=("acil", "önemli"),
    note_triggers=("unutma",),
    note_separators=("notlar",),
    command_prefixes=("görev ekle", "hatırlat"),
    time_markers=("saat",),
    time_units=("'te", "'de", "'da", "'ta", "’te", "’de", "’da", "’ta"),
    day_periods=(
        ("sabah", _AM), ("öğleden sonra", _PM), ("akşam", _PM), ("gece", _NIGHT),
    ),
)

VI_VN = LocaleProfile(
    locale_id="vi-VN",
    flag="🇻🇳",
    name="Tiếng Việt",
    example="Cuộc họp ngày mai lúc 3 giờ chiều",
    tomorrow=("ngày mai",),
    day_after_tomorrow=("ngày kia", "ngày mốt"),
    next_week=("tuần tới", "tuần sau"),
    weekdays=_week("thứ hai", "thứ ba", "thứ tư", "thứ năm", "thứ sáu", "thứ bảy", "chủ nhật"),
    next_weekday=("{day} tới",),
    offsets=(
        OffsetRule(r"(?<!\w)nửa tiếng nữa(?!\w)", "minutes", 30),
        OffsetRule(r"(\d+)\s*phút nữa(?!\w)", "minutes"),
        OffsetRule(r"(\d+)\s*(?:tiếng|giờ) nữa(?!\w)", "hours"),
    ),
    priority_keywords=("khẩn cấp", "quan trọng", "gấp"),
    note_triggers=("đừng quên",),
    note_separators=("ghi chú",),
    command_prefixes=("nhắc tôi", "tạo công việc"),
    location_prefixes=("ở", "tại"),
    non_location_words=("đây", "đó", "nhà"),
    location_stop_words=("ngày", "và", "với"),
    time_markers=("vào lúc", "lúc"),
    time_units=("giờ",),
    day_periods=(
        ("sáng", _AM), ("trưa", _NOON), ("chiều", _PM), ("tối", _PM), ("đêm", _NIGHT),
    ),
)

AR_SA = LocaleProfile(
    locale_id="ar-SA",
    flag="🇸🇦",
    name="العربية",
    example="اجتماع غداً الساعة 3 عصراً",
    tomorrow=("غداً", "غدا", "بكرة"),
    day_after_tomorrow=("بعد غد",),
    next_week=("الأسبوع القادم", "الاسبوع القادم"),
    weekdays=_week(
        "الاثنين|الإثنين", "الثلاثاء", "الأربعاء|الاربعاء", "الخميس",
        "الجمعة", "السبت", "الأحد|الاحد",
    ),
    next_weekday=("{day} القادم",),
    offsets=(
        OffsetRule(r"بعد نصف ساعة", "minutes", 30),
        OffsetRule(r"بعد (\d+) (?:دقيقة|دقائق)", "minutes"),
        OffsetRule(r"بعد (\d+) (?:ساعة|ساعات)", "hours"),
    ),
    priority_keywords=("عاجل", "مهم"),
    note_triggers=("لا تنسى", "لا تنس"),
    note_separators=("ملاحظات", "ملاحظة"),
    command_prefixes=("ذكرني", "أضف مهمة"),
    location_prefixes=("في",),
    time_markers=("الساعة",),
    day_periods=(
        ("صباحاً", _AM), ("صباحا", _AM),
        ("ظهراً", _NOON), ("ظهرا", _NOON),
        ("عصراً", _PM), ("عصرا", _PM), ("مساءً", _PM), ("مساء", _PM),
        ("ليلاً", _NIGHT), ("ليلا", _NIGHT),
    ),
)

HI_IN = LocaleProfile(
    locale_id="hi-IN",
    flag="🇮🇳",
    name="हिन्दी",
    example="कल दोपहर 3 बजे बैठक",
    tomorrow=("कल",),
    day_after_tomorrow=("परसों",),
    next_week=("अगले सप्ताह", "अगले हफ्ते"),
    weekdays=_week("सोमवार", "मंगलवार", "बुधवार", "गुरुवार", "शुक्रवार", "शनिवार", "रविवार"),
    next_weekday=("अगले {day}",),
    offsets=(
        OffsetRule(r"आधे घंटे में", "minutes", 30),
        OffsetRule(r"(\d+) मिनट में", "minutes"),
        OffsetRule(r"(\d+) घंटे में", "hours"),
    ),
    priority_keywords=("ज़रूरी", "जरूरी", "तत्काल", "महत्वपूर्ण"),
    note_triggers=("भूलना मत", "मत भूलना"),
    note_separators=("नोट",),
    command_prefixes=("मुझे याद दिलाओ", "याद दिलाना"),
    time_units=("बजे", "baje"),
    day_periods=(("सुबह", _AM), ("दोपहर", _NOON), ("शाम", _PM), ("रात", _NIGHT)),
)

TH_TH = LocaleProfile(
    locale_id="th-TH",
    flag="🇹🇭",
    name="ไทย",
    example="ประชุมพรุ่งนี้ตอนบ่าย 3 โมง",
    tomorrow=("พรุ่งนี้",),
    day_after_tomorrow=("มะรืนนี้", "มะรืน"),
    next_week=("อาทิตย์หน้า", "สัปดาห์หน้า"),
    weekdays=_week(
        "วันจันทร์", "วันอังคาร", "วันพุธ", "วันพฤหัสบดี", "วันศุกร์", "วันเสาร์", "วันอาทิตย์",
    ),
    next_weekday=("{day}หน้า",),
    offsets=(
        OffsetRule(r"อีกครึ่งชั่วโมง", "minutes", 30),
        OffsetRule(r"อีก\s*(\d+)\s*นาที", "minutes"),
        OffsetRule(r"อีก\s*(\d+)\s*ชั่วโมง", "hours"),
    ),
    priority_keywords=("ด่วน", "สำคัญ"),
    note_triggers=("อย่าลืม",),
    note_separators=("หมายเหตุ",),
    command_prefixes=("เตือนฉัน", "สร้างงาน"),
    time_units=("โมง", "นาฬิกา"),
    day_periods=(("เช้า", _AM), ("บ่าย", _PM), ("เย็น", _PM)),
)

PROFILES: tuple[LocaleProfile, ...] = (
    ID_ID, EN_US, EN_GB, JA_JP, KO_KR, ZH_CN, ZH_TW, ES_ES, FR_FR, DE_DE,
    PT_BR, AR_SA, HI_IN, TH_TH, VI_VN, MS_MY, IT_IT, RU_RU, TR_TR,
)


class LocaleStore:
    """Read-only lookup over the locale profiles."""

    def __init__(
        self,
        profiles: Iterable[LocaleProfile] = PROFILES,
        default_locale: str = DEFAULT_LOCALE,
    ):
        self._profiles = {p.locale_id: p for p in profiles}
        self._default = self._profiles[default_locale]

    @property
    def default(self) -> LocaleProfile:
        return self._default

    @property
    def locale_ids(self) -> tuple[str, ...]:
        return tuple(self._profiles)

    def profiles(self) -> tuple[LocaleProfile, ...]:
        return tuple(self._profiles.values())

    def resolve_id(self, locale_id: str | None, auto_locale: str | None = None) -> str:
        """Map a locale identifier onto a supported profile id.

        ``Auto`` (or nothing) resolves to ``auto_locale``, which defaults to
        ``settings.default_locale``. Matching is lenient: "ja_JP", "JA-jp"
        and the bare language "ja" all resolve to "ja-JP". Anything else falls
        back to ``Auto``.
        """
        if not locale_id or locale_id.strip().lower() == AUTO_LOCALE.lower():
            target = auto_locale or settings.default_locale
            if target.strip().lower() == AUTO_LOCALE.lower():
                return self._default.locale_id
            return self.resolve_id(target, auto_locale=self._default.locale_id)

        wanted = locale_id.strip().replace("_", "-").lower()
        for profile_id in self._profiles:
            if profile_id.lower() == wanted:
                return profile_id

        language = wanted.split("-")[0]
        for profile in self._profiles.values():
            if profile.language == language:
                return profile.locale_id

        logger.debug(f"Unsupported locale {locale_id!r}, using {AUTO_LOCALE}")
        return self.resolve_id(AUTO_LOCALE, auto_locale=auto_locale)

    def get(self, locale_id: str | None) -> LocaleProfile:
        return self._profiles[self.resolve_id(locale_id)]

    def category(self, profile: LocaleProfile, name: str) -> tuple:
        """Return a profile's own entries for ``name``, or the default's."""
        value = getattr(profile, name)
        if value is None:
            value = getattr(self._default, name)
        return tuple(value)

    def merged(self, name: str, locale_id: str, search_all: bool = True) -> tuple:
        """Entries for ``name``: active profile first, then the others.

        With ``search_all`` off only the active profile and the default
        fallback contribute. Duplicates keep their first position.
        """
        active = self._profiles[locale_id]
        sources = [active]
        if search_all:
            sources.extend(p for p in self._profiles.values() if p is not active)
        elif active is not self._default:
            sources.append(self._default)

        seen: set = set()
        result = []
        for profile in sources:
            for entry in self.category(profile, name):
                key = entry[0] if name in _PAIR_CATEGORIES else entry
                if key in seen:
                    continue
                seen.add(key)
                result.append(entry)
        return tuple(result)


store = LocaleStore()


@dataclass(frozen=True)
class PhraseView:
    """Merged phrase lists for one active locale.

    Hashable, so stage modules can cache compiled patterns per view.
    """

    locale_id: str
    search_all: bool = True

    def get(self, category: str) -> tuple:
        return _merged(self.locale_id, self.search_all, category)

    def words(self, category: str) -> tuple[str, ...]:
        """Phrases of a keyed category, without their values."""
        return tuple(name for name, _ in self.get(category))


@lru_cache(maxsize=None)
def _merged(locale_id: str, search_all: bool, category: str) -> tuple:
    return store.merged(category, locale_id, search_all)


def phrases_for(locale: str | None = None, search_all: bool | None = None) -> PhraseView:
    """Build the phrase view the pipeline stages read from."""
    if search_all is None:
        search_all = settings.search_all_locales
    return PhraseView(store.resolve_id(locale), search_all)


# --- regex helpers shared by every stage ---

# Scripts written with spaces between words get word-boundary guards.
# CJK, Thai and Hangul attach particles directly, so their phrases match bare.
_SPACED_CHAR = re.compile(r"[0-9A-Za-zÀ-ɏḀ-ỿͰ-ӿ؀-ۿऀ-ॿ']")


def phrase_regex(phrase: str) -> str:
    """Escape a phrase, allowing flexible whitespace and boundary guards."""
    body = r"\s+".join(re.escape(part) for part in phrase.split())
    if not body:
        return r"(?!)"
    if _SPACED_CHAR.match(phrase[0]):
        body = r"(?<!\w)" + body
    if _SPACED_CHAR.match(phrase[-1]):
        body = body + r"(?!\w)"
    return body


def alternation(phrases: Iterable[str]) -> str:
    """Non-capturing alternation, longest phrase first."""
    unique = list(dict.fromkeys(p for p in phrases if p))
    if not unique:
        return r"(?!)"
    unique.sort(key=len, reverse=True)
    return "(?:" + "|".join(phrase_regex(p) for p in unique) + ")"


def bare_alternation(phrases: Iterable[str]) -> str:
    """Like ``alternation`` but without boundary guards (escaped only)."""
    unique = list(dict.fromkeys(p for p in phrases if p))
    if not unique:
        return r"(?!)"
    unique.sort(key=len, reverse=True)
    return "(?:" + "|".join(r"\s+".join(map(re.escape, p.split())) for p in unique) + ")"


def suffix_alternation(phrases: Iterable[str]) -> str:
    """Alternation for words glued to a preceding number ("3pm", "15h30").

    No leading guard; a trailing guard only stops the match inside a longer
    word, so "15h30" still matches "h".
    """
    unique = list(dict.fromkeys(p for p in phrases if p))
    if not unique:
        return r"(?!)"
    unique.sort(key=len, reverse=True)
    parts = []
    for phrase in unique:
        body = r"\s+".join(re.escape(part) for part in phrase.split())
        if _SPACED_CHAR.match(phrase[-1]):
            body += r"(?![^\W\d_])"
        parts.append(body)
    return "(?:" + "|".join(parts) + ")"


def is_spaced(phrase: str) -> bool:
    """True for phrases written in a script that separates words with spaces."""
    return bool(phrase) and bool(_SPACED_CHAR.match(phrase[0]))
