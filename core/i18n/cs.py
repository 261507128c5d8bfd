translations = {
    "Common languages": "Běžné jazyky",
    "No results found": "Nic nenalezeno",
    "Find a language": "Najít jazyk",
    "Choose a language": "Zvolte jazyk",
    "Chosen language: ": "Zvolený jazyk: ",
    "Weak": "Slabé",
    "Medium": "Střední",
    "Strong": "Silné",
    "Must be at least 8 characters": "Musí mít alespoň 8 znaků",
    "Passphrases must match": "Hesla se musí shodovat",
    "Create a passphrase": "Vytvořit heslo",
    "Passphrase": "Heslo",
    "Confirm passphrase": "Potvrdit heslo",
    "Encrypt the selected devices?": "Šifrovat vybraná zařízení?",
}
