translations = {
    "Common languages": "Häufige Sprachen",
    "No results found": "Keine Ergebnisse gefunden",
    "Find a language": "Sprache suchen",
    "Choose a language": "Sprache auswählen",
    "Chosen language: ": "Gewählte Sprache: ",
    "Weak": "Schwach",
    "Medium": "Mittel",
    "Strong": "Stark",
    "Must be at least 8 characters": "Muss mindestens 8 Zeichen lang sein",
    "Passphrases must match": "Passphrasen müssen übereinstimmen",
    "Create a passphrase": "Passphrase erstellen",
    "Passphrase": "Passphrase",
    "Confirm passphrase": "Passphrase bestätigen",
    "Encrypt the selected devices?": "Ausgewählte Geräte verschlüsseln?",
}
