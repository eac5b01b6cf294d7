"""Localized advisory text, keyed by language, type and severity.

Titles carry no numbers so an advisory's identity key stays stable across
readings. Messages follow "[condition + value] → [action]".
"""

TITLES = {
    "en": {
        "rain": {"high": "Heavy Rain Warning", "medium": "Rain Alert", "low": "Rain Advisory"},
        "heat": {"high": "Extreme Heat Warning", "medium": "High Temperature Alert", "low": "Warm Weather Advisory"},
        "wind": {"high": "Storm Wind Warning", "medium": "Strong Wind Alert", "low": "Wind Advisory"},
        "humidity": {"high": "Severe Humidity Warning", "medium": "High Humidity Alert", "low": "Humidity Advisory"},
        "storage": {"high": "Stored Crop at Risk", "medium": "Storage Risk Alert", "low": "Storage Advisory"},
        "harvest": {"high": "Harvest at Risk", "medium": "Harvest Timing Alert", "low": "Harvest Advisory"},
        "general": {"high": "Crop Risk Warning", "medium": "Crop Risk Alert", "low": "Crop Advisory"},
    },
    "bn": {
        "rain": {"high": "ভারী বৃষ্টির সতর্কতা", "medium": "বৃষ্টির সতর্কতা", "low": "বৃষ্টির পরামর্শ"},
        "heat": {"high": "তীব্র গরমের সতর্কতা", "medium": "উচ্চ তাপমাত্রার সতর্কতা", "low": "গরম আবহাওয়ার পরামর্শ"},
        "wind": {"high": "ঝড়ো হাওয়ার সতর্কতা", "medium": "প্রবল বাতাসের সতর্কতা", "low": "বাতাসের পরামর্শ"},
        "humidity": {"high": "অতিরিক্ত আর্দ্রতার সতর্কতা", "medium": "উচ্চ আর্দ্রতার সতর্কতা", "low": "আর্দ্রতার পরামর্শ"},
        "storage": {"high": "গুদামের ফসল ঝুঁকিতে", "medium": "গুদামের ঝুঁকির সতর্কতা", "low": "গুদাম পরামর্শ"},
        "harvest": {"high": "ফসল কাটা ঝুঁকিতে", "medium": "ফসল কাটার সময়ের সতর্কতা", "low": "ফসল কাটার পরামর্শ"},
        "general": {"high": "ফসলের ঝুঁকির সতর্কতা", "medium": "ফসলের ঝুঁকি", "low": "ফসলের পরামর্শ"},
    },
}

# (context, "high" | "other") -> template; context is harvest_soon, growing, stored or general
URGENT_MESSAGES = {
    "en": {
        "rain": {
            ("harvest_soon", "high"): "Rain {value}{unit} in the next 3 days → Harvest {crop} today or cover it",
            ("harvest_soon", "other"): "Rain {value}{unit} expected → Plan to harvest {crop} early",
            ("growing", "high"): "Heavy rain {value}{unit} → Clear drains, do not let water stand in the {crop} field",
            ("growing", "other"): "Rain {value}{unit} expected → Check drainage in the {crop} field",
            ("general", "high"): "Heavy rain {value}{unit} → Cover crops and stores, clear drains",
            ("general", "other"): "Rain {value}{unit} expected → Get ready to cover crops",
            ("stored", "high"): "Heavy rain {value}{unit} → Cover the {crop} stored in {storage} and keep water out",
            ("stored", "other"): "Rain {value}{unit} expected → Check covers on the {crop} stored in {storage}",
        },
        "heat": {
            ("harvest_soon", "high"): "Temperature rising to {value}°C → Do not harvest {crop} at midday, harvest morning or evening",
            ("harvest_soon", "other"): "Temperature {value}°C → Choose morning or evening to harvest {crop}",
            ("growing", "high"): "Temperature rising to {value}°C → Irrigate the {crop} field in the afternoon",
            ("growing", "other"): "Temperature {value}°C → Irrigate the {crop} field regularly",
            ("general", "high"): "Temperature rising to {value}°C → Shade and ventilate stores",
            ("general", "other"): "Temperature {value}°C → Monitor crops and stores regularly",
            ("stored", "high"): "Temperature rising to {value}°C → Shade and ventilate the {crop} stored in {storage}",
            ("stored", "other"): "Temperature {value}°C → Check the {crop} stored in {storage} for heat damage",
        },
        "humidity": {
            ("harvest_soon", "high"): "Humidity {value}% → Dry {crop} quickly after harvest, fungal disease is likely",
            ("harvest_soon", "other"): "Humidity {value}% → Dry {crop} thoroughly after harvest",
            ("growing", "high"): "Humidity {value}% → Watch the {crop} field for fungal disease",
            ("growing", "other"): "Humidity {value}% → Act if disease appears in the {crop} field",
            ("general", "high"): "Humidity {value}% → Run fans in stores and keep grain dry",
            ("general", "other"): "Humidity {value}% → Improve ventilation in stores",
            ("stored", "high"): "Humidity {value}% → Dry the {crop} stored in {storage} and run fans",
            ("stored", "other"): "Humidity {value}% → Keep air moving around the {crop} stored in {storage}",
        },
        "wind": {
            ("harvest_soon", "high"): "Storm winds {value} m/s → {crop} may lodge, harvest early",
            ("harvest_soon", "other"): "Wind {value} m/s → Plan to harvest {crop} before it is damaged",
            ("growing", "high"): "Storm winds {value} m/s → {crop} plants may lodge, give them support",
            ("growing", "other"): "Wind {value} m/s → Check the {crop} field for damage",
            ("general", "high"): "Storm winds {value} m/s → Secure store doors and covers",
            ("general", "other"): "Wind {value} m/s → Tie down covers over open crops",
            ("stored", "high"): "Storm winds {value} m/s → Tie down covers over the {crop} stored in {storage}",
            ("stored", "other"): "Wind {value} m/s → Check covers over the {crop} stored in {storage}",
        },
    },
    "bn": {
        "rain": {
            ("harvest_soon", "high"): "আগামী ৩ দিনে বৃষ্টি {value}{unit} → আজই {crop} কাটুন অথবা ঢেকে রাখুন",
            ("harvest_soon", "other"): "বৃষ্টির সম্ভাবনা {value}{unit} → {crop} তাড়াতাড়ি কাটার পরিকল্পনা করুন",
            ("growing", "high"): "ভারী বৃষ্টি {value}{unit} → নালা পরিষ্কার করুন, {crop} ক্ষেতে জল জমতে দেবেন না",
            ("growing", "other"): "বৃষ্টির সম্ভাবনা {value}{unit} → {crop} ক্ষেতের নিকাশ ব্যবস্থা পরীক্ষা করুন",
            ("general", "high"): "ভারী বৃষ্টি {value}{unit} → ফসল ও গুদাম ঢেকে রাখুন, নালা পরিষ্কার করুন",
            ("general", "other"): "বৃষ্টির সম্ভাবনা {value}{unit} → ফসল ঢেকে রাখার প্রস্তুতি নিন",
            ("stored", "high"): "ভারী বৃষ্টি {value}{unit} → {storage}-এ রাখা {crop} ঢেকে রাখুন, পানি ঢুকতে দেবেন না",
            ("stored", "other"): "বৃষ্টির সম্ভাবনা {value}{unit} → {storage}-এ রাখা {crop} এর ঢাকনা পরীক্ষা করুন",
        },
        "heat": {
            ("harvest_soon", "high"): "তাপমাত্রা {value}°C উঠবে → দুপুরে {crop} কাটবেন না, সকাল/সন্ধ্যায় কাটুন",
            ("harvest_soon", "other"): "তাপমাত্রা {value}°C → {crop} কাটার সময় সকাল বা সন্ধ্যা বেছে নিন",
            ("growing", "high"): "তাপমাত্রা {value}°C উঠবে → বিকেলের দিকে {crop} ক্ষেতে সেচ দিন",
            ("growing", "other"): "তাপমাত্রা {value}°C → {crop} ক্ষেতে নিয়মিত সেচ দিন",
            ("general", "high"): "তাপমাত্রা {value}°C উঠবে → গুদামে ছায়া ও বায়ুচলাচলের ব্যবস্থা করুন",
            ("general", "other"): "তাপমাত্রা {value}°C → ফসল ও গুদাম নিয়মিত পর্যবেক্ষণ করুন",
            ("stored", "high"): "তাপমাত্রা {value}°C উঠবে → {storage}-এ রাখা {crop} ছায়ায় রাখুন, বাতাস চলাচল করান",
            ("stored", "other"): "তাপমাত্রা {value}°C → {storage}-এ রাখা {crop} নিয়মিত পরীক্ষা করুন",
        },
        "humidity": {
            ("harvest_soon", "high"): "আর্দ্রতা {value}% → {crop} কাটার পর দ্রুত শুকান, ছত্রাক রোগ হতে পারে",
            ("harvest_soon", "other"): "আর্দ্রতা {value}% → {crop} কাটার পর ভালো করে শুকাতে হবে",
            ("growing", "high"): "আর্দ্রতা {value}% → {crop} ক্ষেতে ছত্রাক রোগের জন্য সতর্ক থাকুন",
            ("growing", "other"): "আর্দ্রতা {value}% → {crop} ক্ষেতে রোগ দেখা দিলে ব্যবস্থা নিন",
            ("general", "high"): "আর্দ্রতা {value}% → গুদামে ফ্যান চালান, ফসল শুকনো রাখুন",
            ("general", "other"): "আর্দ্রতা {value}% → গুদামের বায়ুচলাচল বাড়ান",
            ("stored", "high"): "আর্দ্রতা {value}% → {storage}-এ রাখা {crop} শুকিয়ে নিন, ফ্যান চালান",
            ("stored", "other"): "আর্দ্রতা {value}% → {storage}-এ রাখা {crop} এর চারপাশে বায়ুচলাচল বাড়ান",
        },
        "wind": {
            ("harvest_soon", "high"): "ঝড়ো হাওয়া {value} মি/সে → {crop} হেলে পড়তে পারে, তাড়াতাড়ি কাটুন",
            ("harvest_soon", "other"): "বাতাসের গতি {value} মি/সে → {crop} ক্ষতি হওয়ার আগে কাটার পরিকল্পনা করুন",
            ("growing", "high"): "ঝড়ো হাওয়া {value} মি/সে → {crop} গাছ হেলে পড়তে পারে, সাপোর্ট দিন",
            ("growing", "other"): "বাতাসের গতি {value} মি/সে → {crop} ক্ষেতে ক্ষতি হয়েছে কিনা পরীক্ষা করুন",
            ("general", "high"): "ঝড়ো হাওয়া {value} মি/সে → গুদামের দরজা-জানালা ও ছাউনি শক্ত করে বাঁধুন",
            ("general", "other"): "বাতাসের গতি {value} মি/সে → খোলা ফসল ঢেকে বেঁধে রাখুন",
            ("stored", "high"): "ঝড়ো হাওয়া {value} মি/সে → {storage}-এ রাখা {crop} এর ছাউনি শক্ত করে বাঁধুন",
            ("stored", "other"): "বাতাসের গতি {value} মি/সে → {storage}-এ রাখা {crop} এর ঢাকনা পরীক্ষা করুন",
        },
    },
}

URGENT_ACTIONS = {
    "en": {
        "rain": [
            "Check and clear drainage channels",
            "Delay harvesting if possible",
            "Protect stored crops from moisture",
            "Monitor for fungal diseases",
        ],
        "heat": [
            "Increase irrigation frequency",
            "Apply mulch to retain soil moisture",
            "Consider shade nets for sensitive crops",
            "Monitor crops for signs of heat stress",
        ],
        "humidity": [
            "Improve air circulation around crops",
            "Apply preventive fungicides if needed",
            "Monitor for signs of disease",
            "Reduce irrigation to avoid excess moisture",
        ],
        "wind": [
            "Stake tall crops for support",
            "Secure loose materials and equipment",
            "Delay spraying operations",
            "Check for physical damage after wind subsides",
        ],
    },
    "bn": {
        "rain": [
            "নালা পরীক্ষা ও পরিষ্কার করুন",
            "সম্ভব হলে ফসল কাটা পিছিয়ে দিন",
            "গুদামের ফসল আর্দ্রতা থেকে রক্ষা করুন",
            "ছত্রাক রোগের দিকে নজর রাখুন",
        ],
        "heat": [
            "সেচের পরিমাণ বাড়ান",
            "মাটির আর্দ্রতা ধরে রাখতে মালচ দিন",
            "সংবেদনশীল ফসলে ছায়া জাল ব্যবহার করুন",
            "গরমের চাপে ফসলের লক্ষণ পর্যবেক্ষণ করুন",
        ],
        "humidity": [
            "ফসলের চারপাশে বায়ু চলাচল বাড়ান",
            "প্রয়োজনে প্রতিরোধমূলক ছত্রাকনাশক দিন",
            "রোগের লক্ষণ পর্যবেক্ষণ করুন",
            "অতিরিক্ত আর্দ্রতা এড়াতে সেচ কমান",
        ],
        "wind": [
            "লম্বা ফসল খুঁটি দিয়ে বেঁধে রাখুন",
            "খোলা জিনিসপত্র ও যন্ত্রপাতি সুরক্ষিত করুন",
            "স্প্রে করা পিছিয়ে দিন",
            "বাতাস থামার পর ক্ষতি পরীক্ষা করুন",
        ],
    },
}

STORAGE_SUMMARY = {
    "en": (
        "Your {crop} stored in {storage} is at risk. Temperature {temperature}°C, "
        "humidity {humidity}%, rainfall {rainfall}mm. Take precautions now."
    ),
    "bn": (
        "আপনার {crop} ফসল {storage} গুদামে ঝুঁকিতে রয়েছে। তাপমাত্রা {temperature}°C, "
        "আর্দ্রতা {humidity}%, বৃষ্টিপাত {rainfall}mm। অবিলম্বে সতর্কতামূলক ব্যবস্থা নিন।"
    ),
}

GROWING_SUMMARY = {
    "en": (
        "Your {crop} crop is at risk from the weather. {harvest}Temperature {temperature}°C, "
        "humidity {humidity}%, rainfall {rainfall}mm, wind {wind} m/s. Take protective measures."
    ),
    "bn": (
        "আপনার {crop} ফসল আবহাওয়ার কারণে ঝুঁকিতে রয়েছে। {harvest}তাপমাত্রা {temperature}°C, "
        "আর্দ্রতা {humidity}%, বৃষ্টিপাত {rainfall}mm, বাতাসের গতি {wind} m/s। সুরক্ষামূলক ব্যবস্থা নিন।"
    ),
}

HARVEST_CLAUSE = {
    "en": "Harvest is due in {days} days. ",
    "bn": "আপনার ফসল {days} দিনের মধ্যে কাটার সময়। ",
}

STORAGE_NAMES = {
    "en": {"silo": "a silo", "jute_bag": "jute bags", "open_space": "open space", "tin_shed": "a tin shed"},
    "bn": {"silo": "সাইলো", "jute_bag": "পাটের বস্তা", "open_space": "খোলা জায়গা", "tin_shed": "টিনের ঘর"},
}

DEFAULT_CROP_NAME = {"en": "crop", "bn": "ফসল"}

RAIN_UNITS = {
    "en": {"chance": "%", "amount": "mm"},
    "bn": {"chance": "%", "amount": " মিমি"},
}

NOTIFICATIONS = {
    "en": {
        "scan_healthy_title": "✅ Healthy Crop",
        "scan_healthy_body": "Your crop is healthy! Continue good practices.",
        "scan_disease_title": "⚠️ Disease Detected",
        "scan_disease_body": "{label} - Take action immediately",
        "pending_scans_title": "📋 Pending Scans",
        "pending_scans_body": "Update status for {count} scans",
        "harvest_reminder_title": "🌾 Harvest Reminder",
        "harvest_reminder_body": "{crop} - {days} days until harvest",
    },
    "bn": {
        "scan_healthy_title": "✅ সুস্থ ফসল",
        "scan_healthy_body": "আপনার ফসল সুস্থ! ভালো চর্চা চালিয়ে যান।",
        "scan_disease_title": "⚠️ রোগ শনাক্ত",
        "scan_disease_body": "{label} - অবিলম্বে ব্যবস্থা নিন",
        "pending_scans_title": "📋 অমীমাংসিত স্ক্যান",
        "pending_scans_body": "{count} টি স্ক্যানের ফলাফল আপডেট করুন",
        "harvest_reminder_title": "🌾 ফসল কাটার অনুস্মারক",
        "harvest_reminder_body": "{crop} - {days} দিনে ফসল কাটার সময়",
    },
}
