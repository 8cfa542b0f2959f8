"""
Built-in vocabulary tables for Uzbek (Latin, Cyrillic) and Russian search.

Table order matters: Russian keywords are replaced in declaration order
(longer words such as "автомобиль" come before "авто"), and typo
correction returns the first common word that is close enough.
"""

# Cyrillic (Russian + Uzbek) to Uzbek Latin, per character
CYRILLIC_TO_LATIN = {
    "А": "A", "а": "a",
    "Б": "B", "б": "b",
    "В": "V", "в": "v",
    "Г": "G", "г": "g",
    "Д": "D", "д": "d",
    "Е": "E", "е": "e",
    "Ё": "Yo", "ё": "yo",
    "Ж": "Zh", "ж": "zh",
    "З": "Z", "з": "z",
    "И": "I", "и": "i",
    "Й": "Y", "й": "y",
    "К": "K", "к": "k",
    "Л": "L", "л": "l",
    "М": "M", "м": "m",
    "Н": "N", "н": "n",
    "О": "O", "о": "o",
    "П": "P", "п": "p",
    "Р": "R", "р": "r",
    "С": "S", "с": "s",
    "Т": "T", "т": "t",
    "У": "U", "у": "u",
    "Ф": "F", "ф": "f",
    "Х": "X", "х": "x",
    "Ц": "Ts", "ц": "ts",
    "Ч": "Ch", "ч": "ch",
    "Ш": "Sh", "ш": "sh",
    "Щ": "Shch", "щ": "shch",
    "Ъ": "", "ъ": "",
    "Ы": "Y", "ы": "y",
    "Ь": "", "ь": "",
    "Э": "E", "э": "e",
    "Ю": "Yu", "ю": "yu",
    "Я": "Ya", "я": "ya",
    # Uzbek-specific letters
    "Ғ": "G'", "ғ": "g'",
    "Қ": "Q", "қ": "q",
    "Ң": "Ng", "ң": "ng",
    "Ө": "O'", "ө": "o'",
    "Ҳ": "H", "ҳ": "h",
    "Ў": "O'", "ў": "o'",
}

# Russian word -> Uzbek Latin equivalent
RUSSIAN_TO_UZBEK_KEYWORDS = {
    # Real estate
    "дом": "uy",
    "квартира": "kvartira",
    "недвижимость": "kuchmas mulk",
    # Transport
    "машина": "mashina",
    "автомобиль": "avtomobil",
    "авто": "mashina",
    "грузовик": "kamaz",
    "велосипед": "velosiped",
    "мотоцикл": "mototsikl",
    # Electronics
    "телефон": "telefon",
    "смартфон": "smartfon",
    "компьютер": "kompyuter",
    "ноутбук": "noutbuk",
    "планшет": "planshet",
    "телевизор": "televizor",
    # Furniture
    "мебель": "mebel",
    "стол": "stol",
    "стул": "stul",
    "диван": "divan",
    "кровать": "karavot",
    # Clothing
    "одежда": "kiyim",
    "обувь": "poyabzal",
    "рубашка": "ko'ylak",
    "брюки": "shim",
}

REAL_ESTATE_SYNONYMS = {
    "kuchmas mulk": ["uy", "kvartira", "xonadon", "uy-joy", "kvartira", "uy sotish", "uy ijaraga"],
    "uy": ["kvartira", "xonadon", "uy-joy", "kuchmas mulk", "uy sotish"],
    "kvartira": ["uy", "xonadon", "uy-joy", "kuchmas mulk"],
    "xonadon": ["uy", "kvartira", "uy-joy"],
    "uy sotish": ["kvartira sotish", "uy-joy sotish", "kuchmas mulk sotish"],
    "uy ijaraga": ["kvartira ijaraga", "uy-joy ijaraga"],
}

TRANSPORT_SYNONYMS = {
    "kamaz": ["yuk mashinasi", "yuk avtomobili", "yuk mashina", "yuk mashinasi sotish"],
    "mashina": ["avtomobil", "mashina sotish", "avtomobil sotish"],
    "avtomobil": ["mashina", "avto", "avtomobil sotish", "mashina sotish"],
    "yuk mashinasi": ["kamaz", "yuk avtomobili", "yuk mashina"],
    "mototsikl": ["motosikl", "mototsikl sotish", "motosikl sotish"],
    "velosiped": ["velo", "velosiped sotish"],
}

ELECTRONICS_SYNONYMS = {
    "telefon": ["smartfon", "telefon sotish", "smartfon sotish"],
    "smartfon": ["telefon", "mobil telefon"],
    "kompyuter": ["komp", "kompyuter sotish", "komp sotish"],
    "noutbuk": ["laptop", "noutbuk sotish", "laptop sotish"],
    "planshet": ["planshet sotish", "planshet"],
    "televizor": ["tv", "televizor sotish", "tv sotish"],
}

FURNITURE_SYNONYMS = {
    "mebel": ["mebel sotish", "uy mebeli"],
    "stol": ["stol sotish", "jurnal stoli", "oshxona stoli"],
    "divan": ["divan sotish", "sofalar"],
    "karavot": ["krovat", "karavot sotish", "krovat sotish"],
}

CLOTHING_SYNONYMS = {
    "kiyim": ["kiyim sotish", "yangi kiyim"],
    "poyabzal": ["botinka", "poyabzal sotish", "botinka sotish"],
    "botinka": ["poyabzal", "etiklari"],
}

# Russian terms typed by Russian-speaking users
RUSSIAN_SYNONYMS = {
    "дом": ["uy", "kvartira", "xonadon"],
    "квартира": ["kvartira", "uy", "xonadon"],
    "машина": ["mashina", "avtomobil"],
    "автомобиль": ["avtomobil", "mashina"],
    "телефон": ["telefon", "smartfon"],
    "ноутбук": ["noutbuk", "laptop"],
    "мебель": ["mebel"],
    "одежда": ["kiyim"],
    "обувь": ["poyabzal", "botinka"],
}

SYNONYMS = {
    **REAL_ESTATE_SYNONYMS,
    **TRANSPORT_SYNONYMS,
    **ELECTRONICS_SYNONYMS,
    **FURNITURE_SYNONYMS,
    **CLOTHING_SYNONYMS,
    **RUSSIAN_SYNONYMS,
}

# Canonical brand -> spellings seen in the wild (Latin, Cyrillic, typos)
BRAND_MAPPINGS = {
    # Sports
    "nike": ["nayk", "найк", "найки", "nayki", "nayke", "naike"],
    "adidas": ["адидас", "adidos", "addidas", "adidass", "adiddas"],
    "puma": ["пума", "pumu", "пумма"],
    "reebok": ["рибок", "ribok", "ribook", "ребок"],
    "new balance": ["нью баланс", "newbalance", "new balans", "ньюбаланс"],
    "under armour": ["андер армор", "underarmour", "under armor"],
    "asics": ["асикс", "asix", "assics"],
    "fila": ["фила", "filla"],
    "converse": ["конверс", "convers", "konvers"],
    "vans": ["ванс", "vanz"],
    # Fashion
    "zara": ["зара", "zarro", "zaara"],
    "h&m": ["hm", "h m", "эйчэнэм", "h and m"],
    "gucci": ["гуччи", "guchi", "гучи", "guci"],
    "louis vuitton": ["луи виттон", "lv", "лв", "lui vitton", "louis vitton"],
    "versace": ["версаче", "versachi"],
    "dolce gabbana": ["дольче габбана", "dolce gabana", "d&g", "дг"],
    "armani": ["армани", "armoni", "армони"],
    "calvin klein": ["кельвин кляйн", "ck", "ск", "kelvin klein"],
    "tommy hilfiger": ["томми хилфигер", "tommy", "tommi"],
    "lacoste": ["лакост", "lacost", "lakost"],
    "polo": ["поло", "polo ralph lauren"],
    "levis": ["левис", "левайс", "levi's"],
    # Electronics
    "samsung": ["самсунг", "sumsung", "samsng"],
    "apple": ["эпл", "appl", "epl"],
    "iphone": ["айфон", "ayfon", "ifone", "i phone"],
    "xiaomi": ["сяоми", "ксиаоми", "xiomi", "shaomi", "шаоми"],
    "huawei": ["хуавей", "huavey", "huavei", "хуавэй"],
    # Cars
    "chevrolet": ["шевроле", "shevrolet", "шеви"],
    "nexia": ["нексия", "neksiya", "nexiya", "neksia"],
    "lacetti": ["лачетти", "laceti", "lachetti", "лачети"],
    "malibu": ["малибу", "maliby", "малибю"],
    "cobalt": ["кобальт", "kobalt"],
    "spark": ["спарк"],
    "matiz": ["матиз", "matiss"],
    "damas": ["дамас", "damos"],
}

# Dictionary used by typo correction, in priority order
COMMON_WORDS = [
    # Transport
    "kamaz", "mashina", "avtomobil", "velosiped", "mototsikl", "yuk mashinasi",
    # Electronics
    "telefon", "kompyuter", "noutbuk", "planshet", "televizor", "smartfon",
    # Real estate
    "uy", "kvartira", "xonadon", "uy-joy",
    # Furniture
    "mebel", "stol", "stul", "divan", "karavot",
    # Clothing
    "kiyim", "futbolka", "shim", "ko'ylak", "poyabzal", "botinka",
]

# Misspellings common enough to correct outright
COMMON_TYPOS = {
    "krossofka": "krossovka",
    "krasovka": "krossovka",
    "futbolga": "futbolka",
    "shimlar": "shim",
    "jinslar": "jinsi",
    "botinkalar": "botinka",
    "korssovka": "krossovka",
    "korsovka": "krossovka",
    "fotbolka": "futbolka",
    "krosovka": "krossovka",
    "adiddas": "adidas",
    "nikke": "nike",
}

CATEGORY_SYNONYMS = {
    "clothing": {
        "synonyms": {
            "krossovka": ["krassofka", "krasofka", "krosovka", "krosvka", "sport oyoq kiyim", "sneaker", "кроссовки", "кроссовка"],
            "tufli": ["tufla", "туфли", "туфля", "klasik oyoq kiyim"],
            "botinka": ["batinka", "bootinki", "ботинки", "ботинка", "qish oyoq kiyim"],
            "shippak": ["shlepka", "shlepansi", "тапочки", "шлепки"],
            "keds": ["kedsi", "кеды", "kedi"],
            "sandal": ["sandaliya", "сандалии", "yoz oyoq kiyim"],
            "futbolka": ["futbalka", "футболка", "t-shirt", "tshirt", "mayka"],
            "ko'ylak": ["kuylak", "koylak", "рубашка", "shirt", "koylek"],
            "kurtka": ["kurtki", "куртка", "jacket", "kurta"],
            "palto": ["пальто", "coat", "plashch"],
            "sviter": ["svetr", "свитер", "sweater", "jumper", "пуловер"],
            "hoodie": ["xudi", "худи", "tolstovka", "толстовка"],
            "jinsi": ["jeans", "джинсы", "jinsa", "jinsy"],
            "shim": ["штаны", "брюки", "shimlar", "pants", "trouser"],
            "shorty": ["short", "шорты", "qisqa shim"],
            "yubka": ["юбка", "skirt", "jupka"],
            "kostyum": ["костюм", "suit", "kastyum", "forma"],
            "sport forma": ["sportivka", "спортивный костюм", "sportivniy", "trenirovka kiyimi"],
            "ichki kiyim": ["белье", "underwear", "kolgotki", "колготки"],
            "bosh kiyim": ["шапка", "shapka", "kepka", "кепка", "hat", "cap"],
            "kamar": ["ремень", "belt", "kamarcha"],
            "sumka": ["сумка", "bag", "ryukzak", "рюкзак", "backpack"],
        },
        "brands": {
            "nike": ["nayk", "найк", "naik", "nyke"],
            "adidas": ["адидас", "adik", "adidass"],
            "puma": ["пума", "pyma"],
            "reebok": ["рибок", "ribok", "ribak"],
            "newbalance": ["new balance", "нью баланс", "nyubalans", "nb"],
            "zara": ["зара", "zarah"],
            "h&m": ["hm", "h and m", "эйч энд эм"],
            "gucci": ["гуччи", "guchi", "guchchi"],
            "louis vuitton": ["lv", "луи виттон", "lui vitton"],
            "chanel": ["шанель", "shanel"],
            "versace": ["версаче", "versachi"],
            "armani": ["армани", "armony"],
            "tommy hilfiger": ["томми хилфигер", "tomi", "hilfiger"],
            "lacoste": ["лакост", "lakost", "lakosta"],
            "polo": ["поло", "ralph lauren"],
            "levis": ["левис", "левайс", "levi's"],
            "wrangler": ["вранглер", "wranger"],
            "columbia": ["коламбия", "columbi"],
            "the north face": ["north face", "норт фейс", "tnf"],
        },
        "attributes": {
            "erkak": ["erkaklar", "мужской", "men", "muzhskoy", "man"],
            "ayol": ["ayollar", "женский", "women", "zhenskiy", "woman"],
            "bola": ["bolalar", "детский", "kids", "detskiy", "child", "children"],
            "original": ["оригинал", "orig", "asl", "genuine"],
            "replika": ["replica", "copy", "nusxa", "реплика", "kopiya"],
            "yangi": ["new", "новый", "new with tags"],
            "ishlatilgan": ["used", "б/у", "bu", "second hand"],
        },
    },
    "electronics": {
        "synonyms": {
            "telefon": ["телефон", "phone", "smartphone", "смартфон", "mobil", "uyali"],
            "noutbuk": ["notebook", "ноутбук", "laptop", "лептоп", "kompyuter", "komputer"],
            "televizor": ["телевизор", "tv", "тв", "televizr", "telik"],
            "planshet": ["планшет", "tablet", "ipad", "айпад"],
            "naushnik": ["наушники", "headphones", "quloqchin", "airpods", "earphones"],
            "kamera": ["camera", "камера", "fotoaparat", "фотоаппарат"],
            "printer": ["принтер", "printerlar"],
            "proyektor": ["проектор", "projector"],
        },
        "brands": {
            "samsung": ["самсунг", "sumsung", "samsunk"],
            "apple": ["эпл", "iphone", "айфон", "macbook", "макбук"],
            "xiaomi": ["сяоми", "шаоми", "mi", "redmi", "редми", "poco"],
            "huawei": ["хуавей", "huavey", "хуавэй"],
            "oppo": ["оппо"],
            "vivo": ["виво"],
            "realme": ["реалми", "realmi"],
            "lg": ["элджи", "elji"],
            "sony": ["сони"],
            "asus": ["асус"],
            "lenovo": ["леново", "lenova"],
            "hp": ["эйчпи", "hewlett packard"],
            "dell": ["делл"],
            "acer": ["асер", "эйсер"],
        },
        "attributes": {
            "yangi": ["new", "новый", "zapechatan"],
            "bu": ["б/у", "used", "ishlatilgan", "second hand"],
            "garantiya": ["гарантия", "warranty", "kafolat"],
        },
    },
    "automotive": {
        "synonyms": {
            "mashina": ["машина", "car", "avtomobil", "автомобиль", "avto"],
            "mototsikl": ["мотоцикл", "motorcycle", "moto", "байк", "bike"],
            "velosiped": ["велосипед", "bicycle", "velo", "bike"],
            "yuk mashina": ["грузовик", "truck", "fura", "kamaz"],
            "avtobus": ["автобус", "bus"],
        },
        "brands": {
            "nexia": ["нексия", "neksiya", "neksia", "daewoo nexia"],
            "cobalt": ["кобальт", "cobolt", "kobalt"],
            "lacetti": ["лачетти", "lachetti", "lacety", "gentra"],
            "malibu": ["малибу", "malibo", "maliby"],
            "spark": ["спарк", "matiz", "матиз"],
            "damas": ["дамас", "damass"],
            "toyota": ["тойота", "tayota", "toiota"],
            "hyundai": ["хундай", "хюндай", "hundai", "hyunday"],
            "kia": ["киа", "kiya"],
            "mercedes": ["мерседес", "mersedes", "benz", "мерс"],
            "bmw": ["бмв", "бэха", "bexa"],
            "audi": ["ауди", "avdi"],
            "volkswagen": ["фольксваген", "vw", "vagen"],
            "ford": ["форд"],
            "honda": ["хонда", "xonda"],
            "nissan": ["ниссан", "nisan"],
            "mazda": ["мазда"],
            "lexus": ["лексус", "leksus"],
        },
        "attributes": {
            "yangi": ["new", "новый", "0 probeg"],
            "probeg": ["пробег", "mileage", "km"],
            "avtomat": ["автомат", "automatic", "at"],
            "mexanika": ["механика", "manual", "mt", "ruchnoy"],
        },
    },
    "realestate": {
        "synonyms": {
            "kvartira": ["квартира", "apartment", "flat", "xonadon"],
            "uy": ["дом", "house", "hovli", "dom"],
            "ofis": ["офис", "office"],
            "magazin": ["магазин", "shop", "dokon", "store"],
            "yer": ["земля", "land", "участок", "uchastok"],
            "garaj": ["гараж", "garage"],
        },
        "brands": {},
        "attributes": {
            "ijara": ["аренда", "rent", "sutkalik", "sutkaga"],
            "sotiladi": ["продажа", "sale", "sotish"],
            "yangi": ["новостройка", "novostroy", "yangi qurilish"],
            "tamir": ["ремонт", "repair", "remont", "evro remont"],
        },
    },
}

# Category names and aliases -> key in CATEGORY_SYNONYMS
CATEGORY_ALIASES = {
    "clothing": "clothing",
    "kiyim-kechak": "clothing",
    "kiyim": "clothing",
    "electronics": "electronics",
    "elektronika": "electronics",
    "automotive": "automotive",
    "transport": "automotive",
    "avtomobil": "automotive",
    "realestate": "realestate",
    "uy-joy": "realestate",
    "kvartira": "realestate",
}
