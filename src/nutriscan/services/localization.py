"""Interface string lookup with placeholder interpolation."""

from dataclasses import dataclass

from nutriscan.domain.state import Language

TRANSLATIONS: dict[Language, dict[str, str]] = {
    Language.EN: {
        # Onboarding
        "tellUsAboutYourself": "Tell Us About Yourself",
        "personalizeExperience": "This helps us personalize your experience.",
        "name": "Name",
        "age": "Age",
        "gender": "Gender",
        "heightCm": "Height (cm)",
        "weightKg": "Weight (kg)",
        "professionActivityLevel": "Profession/Activity Level",
        "dietaryPreference": "Dietary Preference",
        "primaryGoal": "Primary Goal",
        "saveAndContinue": "Save & Continue",
        "nameRequired": "Name is required",
        "ageRequired": "Age is required",
        "genderRequired": "Gender is required",
        "heightRequired": "Height is required",
        "weightRequired": "Weight is required",
        "professionRequired": "Profession is required",
        # Dashboard
        "helloName": "Hello, {{name}}!",
        "readyToTrack": "Ready to track your nutrition?",
        "scanFood": "Scan Food",
        "scanQrBarcode": "Scan QR/Barcode",
        "uploadImage": "Upload Image",
        "dailyProgress": "Daily Progress",
        "calories": "Calories",
        "protein": "Protein",
        "carbs": "Carbs",
        "fats": "Fats",
        "waterIntake": "Water Intake",
        "waterGoal": "Goal: {{goal}}ml",
        # Analysis
        "analyzingFood": "Analyzing your food...",
        "analysisFailed": "Analysis Failed",
        "tryAgain": "Try Again",
        "shouldEat": "Should Eat",
        "moderate": "Moderate",
        "avoid": "Avoid",
        "suggestedServingSize": "Suggested Serving Size",
        "scanAnotherItem": "Scan Another Item",
        # Pages
        "scanHistory": "Scan History",
        "searchHistory": "Search history...",
        "noHistory": "No history yet. Start scanning!",
        "yourWeeklyMealPlan": "Your Weekly Meal Plan",
        "generateNewWeeklyPlan": "Generate New Weekly Plan",
        "generateShoppingList": "Generate Shopping List",
        "generatingPlan": "Generating Plan...",
        "generatingList": "Generating List...",
        "shoppingList": "Shopping List",
        "yourWeeklyWorkoutPlan": "Your Weekly Workout Plan",
        "generateNewWorkoutPlan": "Generate New Workout Plan",
        "mentalWellnessCorner": "Mental Wellness Corner",
        "howAreYouFeeling": "How are you feeling today?",
        "addANote": "Add a note... (optional)",
        "logMood": "Log Mood",
        "yourMoodHistory": "Your Mood History",
        # Assistant
        "nutriScanAssistant": "NutriScan Assistant",
        "howCanIHelp": "Hello, {{name}}! How can I help you with NutriScan AI today?",
        "chatUnavailable": "Sorry, the chat assistant is currently unavailable.",
        "tryAgainLater": "Sorry, I had trouble connecting. Please try again.",
    },
    Language.HI: {
        "tellUsAboutYourself": "हमें अपने बारे में बताएं",
        "personalizeExperience": "यह हमें आपके अनुभव को व्यक्तिगत बनाने में मदद करता है।",
        "name": "नाम",
        "age": "आयु",
        "gender": "लिंग",
        "heightCm": "ऊंचाई (सेमी)",
        "weightKg": "वजन (किग्रा)",
        "professionActivityLevel": "पेशा/गतिविधि स्तर",
        "dietaryPreference": "आहार वरीयता",
        "primaryGoal": "प्राथमिक लक्ष्य",
        "saveAndContinue": "सहेजें और जारी रखें",
        "nameRequired": "नाम आवश्यक है",
        "ageRequired": "आयु आवश्यक है",
        "genderRequired": "लिंग आवश्यक है",
        "heightRequired": "ऊंचाई आवश्यक है",
        "weightRequired": "वजन आवश्यक है",
        "professionRequired": "पेशा आवश्यक है",
        "helloName": "नमस्ते, {{name}}!",
        "readyToTrack": "क्या आप अपने पोषण को ट्रैक करने के लिए तैयार हैं?",
        "scanFood": "भोजन स्कैन करें",
        "scanQrBarcode": "क्यूआर/बारकोड स्कैन करें",
        "uploadImage": "छवि अपलोड करें",
        "dailyProgress": "दैनिक प्रगति",
        "calories": "कैलोरी",
        "protein": "प्रोटीन",
        "carbs": "कार्ब्स",
        "fats": "वसा",
        "waterIntake": "पानी का सेवन",
        "waterGoal": "लक्ष्य: {{goal}} मिली",
        "analyzingFood": "आपके भोजन का विश्लेषण किया जा रहा है...",
        "analysisFailed": "विश्लेषण विफल",
        "tryAgain": "पुनः प्रयास करें",
        "shouldEat": "खाना चाहिए",
        "moderate": "संयम में खाएं",
        "avoid": "खाने से बचें",
        "suggestedServingSize": "सुझाई गई सर्विंग साइज",
        "scanAnotherItem": "दूसरा आइटम स्कैन करें",
        "scanHistory": "स्कैन इतिहास",
        "searchHistory": "इतिहास खोजें...",
        "noHistory": "अभी तक कोई इतिहास नहीं है। स्कैनिंग शुरू करें!",
        "yourWeeklyMealPlan": "आपकी साप्ताहिक भोजन योजना",
        "generateNewWeeklyPlan": "नई साप्ताहिक योजना बनाएं",
        "generateShoppingList": "खरीदारी की सूची बनाएं",
        "generatingPlan": "योजना बना रहा है...",
        "generatingList": "सूची बना रहा है...",
        "shoppingList": "खरीदारी की सूची",
        "yourWeeklyWorkoutPlan": "आपकी साप्ताहिक कसरत योजना",
        "generateNewWorkoutPlan": "नई कसरत योजना बनाएं",
        "mentalWellnessCorner": "मानसिक कल्याण कोना",
        "howAreYouFeeling": "आज आप कैसा महसूस कर रहे हैं?",
        "addANote": "एक नोट जोड़ें... (वैकल्पिक)",
        "logMood": "मूड लॉग करें",
        "yourMoodHistory": "आपका मूड इतिहास",
        "nutriScanAssistant": "न्यूट्रिशन असिस्टेंट",
        "howCanIHelp": (
            "नमस्ते, {{name}}! मैं आज न्यूट्रिशन एआई में आपकी कैसे मदद कर सकता हूँ?"
        ),
        "chatUnavailable": "क्षमा करें, चैट सहायक वर्तमान में अनुपलब्ध है।",
        "tryAgainLater": "क्षमा करें, मुझे कनेक्ट करने में समस्या हुई। कृपया पुनः प्रयास करें।",
    },
}


def parse_language(raw: str | None, default: Language = Language.EN) -> Language:
    """Parse a stored language code, falling back to the default."""
    if raw is None:
        return default
    try:
        return Language(raw.strip().lower())
    except ValueError:
        return default


def interpolate(template: str, values: dict[str, object]) -> str:
    """Replace every {{name}} placeholder with its value."""
    result = template
    for name, value in values.items():
        result = result.replace(f"{{{{{name}}}}}", str(value))
    return result


@dataclass
class Localizer:
    """Key lookup for the active language."""

    language: Language = Language.EN

    def translate(self, key: str, **interpolations: object) -> str:
        """Return the localized string, or the key itself when unknown."""
        text = TRANSLATIONS[self.language].get(key) or key
        if interpolations:
            text = interpolate(text, interpolations)
        return text
