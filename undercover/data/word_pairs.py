"""Curated dictionary of civilian/undercover word pairs."""

from typing import List

from undercover.types.game import WordPair


_PAIRS = [
    # Technology
    ("iPhone", "Samsung"),
    ("Netflix", "Disney+"),
    ("Google", "Bing"),
    ("Instagram", "TikTok"),
    ("Tesla", "BMW"),
    ("PlayStation", "Xbox"),
    ("Zoom", "Skype"),
    ("Spotify", "Deezer"),
    ("YouTube", "Twitch"),
    ("WhatsApp", "Telegram"),

    # Food & Drinks
    ("Coca-Cola", "Pepsi"),
    ("McDonald's", "Burger King"),
    ("Pizza", "Burger"),
    ("Café", "Thé"),
    ("Chocolat", "Bonbon"),
    ("Croissant", "Pain au chocolat"),
    ("Fromage", "Yaourt"),
    ("Pomme", "Poire"),
    ("Eau", "Jus"),
    ("Vin", "Bière"),

    # Animals
    ("Chat", "Chien"),
    ("Lion", "Tigre"),
    ("Aigle", "Faucon"),
    ("Requin", "Dauphin"),
    ("Serpent", "Lézard"),
    ("Cheval", "Poney"),
    ("Lapin", "Lièvre"),
    ("Souris", "Rat"),
    ("Abeille", "Guêpe"),
    ("Papillon", "Libellule"),

    # Transport
    ("Voiture", "Moto"),
    ("Avion", "Hélicoptère"),
    ("Train", "Métro"),
    ("Bateau", "Yacht"),
    ("Vélo", "Trottinette"),
    ("Bus", "Tramway"),
    ("Taxi", "Uber"),
    ("Fusée", "Navette"),

    # Entertainment
    ("Cinéma", "Théâtre"),
    ("Concert", "Festival"),
    ("Livre", "Journal"),
    ("Jeu vidéo", "Application"),
    ("Football", "Rugby"),
    ("Tennis", "Badminton"),
    ("Ski", "Snowboard"),
    ("Piscine", "Plage"),

    # Objects
    ("Téléphone", "Tablette"),
    ("Ordinateur", "Laptop"),
    ("Montre", "Bracelet"),
    ("Lunettes", "Lentilles"),
    ("Parapluie", "Parasol"),
    ("Sac", "Valise"),
    ("Chaussures", "Baskets"),
    ("Chapeau", "Casquette"),

    # Nature
    ("Soleil", "Lune"),
    ("Mer", "Océan"),
    ("Montagne", "Colline"),
    ("Forêt", "Jungle"),
    ("Rivière", "Lac"),
    ("Fleur", "Plante"),
    ("Arbre", "Buisson"),
    ("Nuage", "Brouillard"),

    # Professions
    ("Médecin", "Infirmier"),
    ("Professeur", "Instituteur"),
    ("Police", "Gendarme"),
    ("Pompier", "Sauveteur"),
    ("Cuisinier", "Pâtissier"),
    ("Avocat", "Juge"),
    ("Pilote", "Steward"),
    ("Musicien", "Chanteur"),

    # Colors & Appearance
    ("Rouge", "Rose"),
    ("Bleu", "Turquoise"),
    ("Vert", "Kaki"),
    ("Jaune", "Orange"),
    ("Noir", "Gris"),
    ("Blanc", "Beige"),

    # Weather
    ("Pluie", "Orage"),
    ("Neige", "Grêle"),
    ("Vent", "Tempête"),
    ("Chaud", "Tiède"),
    ("Froid", "Frais"),

    # Places
    ("Maison", "Appartement"),
    ("École", "Université"),
    ("Hôpital", "Clinique"),
    ("Restaurant", "Café"),
    ("Magasin", "Boutique"),
    ("Banque", "Poste"),
    ("Pharmacie", "Laboratoire"),
    ("Parc", "Jardin"),

    # Activities
    ("Courir", "Marcher"),
    ("Nager", "Plonger"),
    ("Danser", "Chanter"),
    ("Lire", "Écrire"),
    ("Cuisiner", "Pâtisser"),
    ("Peindre", "Dessiner"),
    ("Dormir", "Rêver"),
    ("Voyager", "Explorer"),

    # Time
    ("Matin", "Soir"),
    ("Jour", "Nuit"),
    ("Hier", "Demain"),
    ("Semaine", "Mois"),
    ("Printemps", "Automne"),
    ("Été", "Hiver"),

    # Abstract concepts
    ("Amour", "Amitié"),
    ("Bonheur", "Joie"),
    ("Peur", "Stress"),
    ("Rêve", "Cauchemar"),
    ("Succès", "Victoire"),
    ("Problème", "Défi"),
]

WORD_PAIRS: List[WordPair] = [
    WordPair(civilian=civilian, undercover=undercover) for civilian, undercover in _PAIRS
]
