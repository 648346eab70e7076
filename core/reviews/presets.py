"""
Default option catalogs and quotation pool.

Seeded into the database by scripts/init_db.py; the running service reads
them back through core.reviews.reference.
"""

POSITIVE_TRAITS = [
    "認真負責",
    "樂於助人",
    "積極主動",
    "有禮貌",
    "守規矩",
    "專心聽講",
    "熱心服務",
    "富有創意",
    "勇於發言",
    "團隊合作",
    "友愛同學",
    "做事細心",
    "樂觀開朗",
    "按時完成作業",
]

WEAKNESSES = [
    "上課易分心",
    "作業書寫較潦草",
    "較少主動發言",
    "容易粗心大意",
    "時間管理待加強",
    "情緒管理待加強",
    "物品整理待加強",
    "閱讀習慣待養成",
    "遇到困難容易放棄",
    "與同學相處偶有摩擦",
]

SUGGESTIONS = [
    "多發言",
    "養成每日閱讀的習慣",
    "寫完作業後仔細檢查",
    "上課專心聆聽並做筆記",
    "學習規劃時間，按部就班完成任務",
    "遇到困難時勇於向師長請教",
    "多參與團體活動，培養合作精神",
    "整理好自己的書包和抽屜",
    "學習表達自己的情緒",
    "持之以恆地練習，累積實力",
]

FAMOUS_QUOTES = [
    {"text": "失敗是成功之母，只要不放棄，就一定能找到成功的方法。", "author": "愛迪生", "category": "堅持"},
    {"text": "學而時習之，不亦說乎？", "author": "孔子", "category": "學習"},
    {"text": "三人行，必有我師焉。擇其善者而從之，其不善者而改之。", "author": "孔子", "category": "學習"},
    {"text": "天才是百分之一的靈感，加上百分之九十九的努力。", "author": "愛迪生", "category": "努力"},
    {"text": "千里之行，始於足下。", "author": "老子", "category": "堅持"},
    {"text": "書山有路勤為徑，學海無涯苦作舟。", "author": "韓愈", "category": "學習"},
    {"text": "少壯不努力，老大徒傷悲。", "author": "漢樂府", "category": "努力"},
    {"text": "勿以善小而不為，勿以惡小而為之。", "author": "劉備", "category": "品格"},
    {"text": "知之為知之，不知為不知，是知也。", "author": "孔子", "category": "學習"},
    {"text": "鍥而不捨，金石可鏤。", "author": "荀子", "category": "堅持"},
    {"text": "己所不欲，勿施於人。", "author": "孔子", "category": "品格"},
    {"text": "一寸光陰一寸金，寸金難買寸光陰。", "author": "諺語", "category": "時間"},
    {"text": "只要功夫深，鐵杵磨成針。", "author": "諺語", "category": "堅持"},
    {"text": "送人玫瑰，手有餘香。", "author": "諺語", "category": "品格"},
    {"text": "讀書破萬卷，下筆如有神。", "author": "杜甫", "category": "閱讀"},
]
