translations = {
    "Common languages": "Langues courantes",
    "No results found": "Aucun résultat trouvé",
    "Find a language": "Rechercher une langue",
    "Choose a language": "Choisir une langue",
    "Chosen language: ": "Langue choisie : ",
    "Weak": "Faible",
    "Medium": "Moyen",
    "Strong": "Fort",
    "Must be at least 8 characters": "Doit comporter au moins 8 caractères",
    "Passphrases must match": "Les phrases de passe doivent correspondre",
    "Create a passphrase": "Créer une phrase de passe",
    "Passphrase": "Phrase de passe",
    "Confirm passphrase": "Confirmer la phrase de passe",
    "Encrypt the selected devices?": "Chiffrer les périphériques sélectionnés ?",
}
